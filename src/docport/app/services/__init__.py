from .dirty_tracker import DirtyTracker
from .exception_merger import ExceptionMerger, similarity
from .field_merger import FieldMerger, MergeReport
from .interface_remarks import InterfaceRemarksResolver
from .matcher import Matcher, MemberPairing, SourceIndex, TypePairing
from .signature import SignatureNormalizer

__all__ = [
    "DirtyTracker",
    "ExceptionMerger",
    "FieldMerger",
    "InterfaceRemarksResolver",
    "Matcher",
    "MemberPairing",
    "MergeReport",
    "SignatureNormalizer",
    "SourceIndex",
    "TypePairing",
    "similarity",
]
