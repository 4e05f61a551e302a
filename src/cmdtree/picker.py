"""
Interactive command picker.
"""

from collections.abc import Sequence

import questionary

from cmdtree.document import CommandDocument
from cmdtree.help import HelpRow


def pick(listing: Sequence[tuple[CommandDocument, Sequence[HelpRow]]]) -> HelpRow | None:
    """
    Let the user choose a help row with a searchable list.

    Params:
        listing: Documents and their rows, in display order

    Returns:
        The chosen row, or None when there was nothing to pick or the user cancelled
    """
    choices: list[questionary.Choice | questionary.Separator] = []
    for document, rows in listing:
        if not rows:
            continue
        choices.append(questionary.Separator(f"── {document.name} ──"))
        choices.extend(questionary.Choice(title=row.label(), value=row) for row in rows)

    if not choices:
        return None

    return questionary.select(
        "Run command",
        choices=choices,
        use_search_filter=True,
        use_jk_keys=False,
    ).ask()
