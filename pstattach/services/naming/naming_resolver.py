"""Output filename resolution for message attachments."""

from typing import Callable, Dict, Optional, Sequence, Set

NamingRule = Callable[[int, str], str]


def prefix_with_message_id(message_id: int, filename: str, separator: str = "_") -> str:
    """
    Default naming rule: prefix the filename with the message id.

    Examples:
        >>> prefix_with_message_id(7, "report.pdf")
        '7_report.pdf'
    """
    return f"{message_id}{separator}{filename}"


class NamingResolver:
    """
    Resolve attachment filenames that are unique within one message.

    Uniqueness is case-insensitive, so the names stay distinct on
    case-insensitive filesystems.
    """

    def __init__(self, naming_rule: Optional[NamingRule] = None, separator: str = "_"):
        """
        Initialize resolver.

        Args:
            naming_rule: Callable (message_id, filename) -> output name;
                defaults to prefixing with the message id
            separator: Joins message id and filename, and filename and ordinal
        """
        self.separator = separator
        self.naming_rule = naming_rule or (
            lambda message_id, filename: prefix_with_message_id(message_id, filename, separator)
        )

    def resolve(
        self, message_id: int, declared_filenames: Sequence[Optional[str]]
    ) -> Dict[int, str]:
        """
        Map each attachment index to a unique output filename.

        Args:
            message_id: Identifier of the message owning the attachments
            declared_filenames: Declared names ordered by attachment index

        Returns:
            Dict from index to resolved name, in index order

        Notes:
            - Indices are processed in ascending order, so earlier
              attachments keep the plain name and later duplicates get
              "_2", "_3", ... appended to the declared filename
            - Collisions are checked on uppercased names
            - The returned names keep their original case
        """
        seen: Set[str] = set()
        resolved: Dict[int, str] = {}

        for index, declared in enumerate(declared_filenames):
            declared = declared or ""
            candidate = self.naming_rule(message_id, declared)
            ordinal = 1
            while candidate.upper() in seen:
                ordinal += 1
                candidate = self.naming_rule(
                    message_id, f"{declared}{self.separator}{ordinal}"
                )

            seen.add(candidate.upper())
            resolved[index] = candidate

        return resolved
