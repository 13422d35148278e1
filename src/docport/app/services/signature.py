import re
from typing import Optional, Tuple

from docport.spec import CanonicalKey

_KIND_PREFIX = re.compile(r"^([A-Za-z]):")
_WHITESPACE = re.compile(r"\s+")
# "[System.Runtime]System.String" -> "System.String"
_ASSEMBLY_PREFIX = re.compile(r"\[[A-Za-z_][\w.]*\](?=[A-Za-z_])")
# "System.String, System.Runtime, Version=4.0.0.0, Culture=neutral, ..." once
# whitespace is gone.
_ASSEMBLY_SUFFIX = re.compile(
    r",[A-Za-z_][\w.]*,Version=[^,\]\)}]*"
    r"(?:,Culture=[^,\]\)}]*)?(?:,PublicKeyToken=[^,\]\)}]*)?"
)
_ARRAY_LOWER_BOUND = re.compile(r"(?<=[\[,])-?\d+:(?=[,\]])")
# "System#IComparable#CompareTo", but not "#ctor".
_EII_SEPARATOR = re.compile(r"(?<=[\w`}])#(?=\w)")

_PAIRS = {")": "(", "]": "[", "}": "{", ">": "<"}


def _is_balanced(text: str) -> bool:
    stack = []
    for ch in text:
        if ch in "([{<":
            stack.append(ch)
        elif ch in _PAIRS:
            if not stack or stack.pop() != _PAIRS[ch]:
                return False
    return not stack


def _split_signature(body: str) -> Tuple[str, str]:
    index = body.find("(")
    if index < 0:
        return body, ""
    return body[:index], body[index:]


def _split_top_level(text: str, separator: str) -> list:
    parts, depth, current = [], 0, []
    for ch in text:
        if ch in "<{([":
            depth += 1
        elif ch in ">})]":
            depth -= 1
        if ch == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return parts


def _arity_name(segment: str, method: bool) -> str:
    """Turns ``Dictionary<TKey,TValue>`` into ``Dictionary`2``."""
    start = segment.find("<")
    if start < 0 or not segment.endswith(">"):
        return segment
    arity = len(_split_top_level(segment[start + 1 : -1], ","))
    tick = "``" if method else "`"
    return f"{segment[:start]}{tick}{arity}"


class SignatureNormalizer:
    """
    Maps DocIds from either corpus onto one canonical key.

    The function is total: malformed input produces an invalid key rather
    than an exception.
    """

    def normalize(self, raw: Optional[str]) -> CanonicalKey:
        if raw is None:
            return CanonicalKey("", valid=False)

        text = _WHITESPACE.sub("", raw)
        if not text or not _is_balanced(text):
            return CanonicalKey(text, valid=False)

        prefix = ""
        match = _KIND_PREFIX.match(text)
        if match:
            prefix = match.group(1).upper() + ":"
            text = text[match.end() :]
        if not text:
            return CanonicalKey(prefix, valid=False)

        text = _ASSEMBLY_SUFFIX.sub("", text)
        text = _ASSEMBLY_PREFIX.sub("", text)

        name, args = _split_signature(text)
        name = self._normalize_name(name, method=prefix == "M:")
        args = self._normalize_args(args)
        return CanonicalKey(f"{prefix}{name}{args}")

    def containing_type_key(self, raw: Optional[str]) -> CanonicalKey:
        """Returns the key of the type that declares the member ``raw``."""
        if raw is None:
            return CanonicalKey("", valid=False)

        text = _WHITESPACE.sub("", raw)
        match = _KIND_PREFIX.match(text)
        if match and match.group(1).upper() == "T":
            return self.normalize(text)
        if match:
            text = text[match.end() :]

        name, _ = _split_signature(text)
        segments = _split_top_level(name, ".")
        if len(segments) < 2:
            return CanonicalKey(text, valid=False)
        return self.normalize("T:" + ".".join(segments[:-1]))

    def _normalize_name(self, name: str, method: bool) -> str:
        name = name.replace("+", ".").replace("/", ".")
        segments = _split_top_level(name, ".")
        last = len(segments) - 1
        segments = [
            _arity_name(segment, method=method and i == last)
            for i, segment in enumerate(segments)
        ]
        return _EII_SEPARATOR.sub(".", ".".join(segments))

    def _normalize_args(self, args: str) -> str:
        if not args:
            return ""
        args = args.replace("<", "{").replace(">", "}")
        args = args.replace("&", "@").replace("+", ".").replace("/", ".")
        return _ARRAY_LOWER_BOUND.sub("", args)
