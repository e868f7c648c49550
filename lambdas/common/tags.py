# lambdas/common/tags.py
import re
from typing import List

from lambdas.common.errors import InvalidCompletionError, MissingTagError

# An empty same-name tag pair sitting at the very end of the text, e.g. "<Inputs></Inputs>"
_TRAILING_EMPTY_TAG = re.compile(r"<(\w+)></\1>\Z")


def extract_between_tags(tag: str, text: str, strip: bool = False) -> List[str]:
    """
    Returns every non-empty block enclosed by <tag>...</tag> in the text.

    Matching is non-greedy and spans newlines. An empty list means the tag
    was not found.
    """
    pattern = re.compile(f"<{re.escape(tag)}>(.+?)</{re.escape(tag)}>", re.DOTALL)
    matches = pattern.findall(text)
    if strip:
        return [match.strip() for match in matches]
    return matches


def remove_empty_tags(text: str) -> str:
    """
    Drops empty tag pairs from the end of the text until none are left.

    Whitespace is trimmed between passes so that "<a></a>\n<b></b>" collapses
    completely. Running it on its own output changes nothing.
    """
    while True:
        collapsed = _TRAILING_EMPTY_TAG.sub("", text.strip()).strip()
        if collapsed == text:
            return collapsed
        text = collapsed


def extract_tag(content, tag: str, collapse_empty: bool = False) -> str:
    """
    Extracts the first <tag> block from a completion and trims it.

    Args:
        content: The completion text returned by the model.
        tag: The tag name to look for.
        collapse_empty: Also strip empty tag pairs left at the end of the block.

    Raises:
        InvalidCompletionError: If the content is not text.
        MissingTagError: If the tag is absent or encloses nothing.
    """
    if not isinstance(content, str):
        raise InvalidCompletionError(f"Invalid content format in the response: {type(content).__name__}")

    matches = extract_between_tags(tag, content)
    if not matches:
        raise MissingTagError(tag)

    result = remove_empty_tags(matches[0]) if collapse_empty else matches[0].strip()
    if not result:
        raise MissingTagError(tag)
    return result
