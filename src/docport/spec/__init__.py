from .models import (
    PLACEHOLDER,
    ApiEntry,
    ApiKind,
    ApiNode,
    CanonicalKey,
    DocField,
    DocFields,
    ExceptionDoc,
    MergeStatus,
    TypeOutcome,
    is_empty_doc,
)
from .protocols import InterfaceRemarksProtocol, SignatureNormalizerProtocol

__all__ = [
    "PLACEHOLDER",
    "ApiEntry",
    "ApiKind",
    "ApiNode",
    "CanonicalKey",
    "DocField",
    "DocFields",
    "ExceptionDoc",
    "MergeStatus",
    "TypeOutcome",
    "is_empty_doc",
    "InterfaceRemarksProtocol",
    "SignatureNormalizerProtocol",
]
