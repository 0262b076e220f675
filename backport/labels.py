"""Backport label parsing.

A label ``backport <base>`` or ``backport <base> <head>`` asks for the merged
pull request to be replayed onto ``<base>`` as branch ``<head>``.
"""

import re

from backport.event import ActionKind, PullRequestEvent

LABEL_PATTERN = re.compile(r"^backport ([^ ]+)(?: ([^ ]+))?$")


def default_head(pull_request_number: int, base: str) -> str:
    """Branch name used when a label names only the base."""
    return f"backport-{pull_request_number}-to-{base}"


def get_label_names(
    action: ActionKind,
    label: str | None,
    labels: list[str],
) -> list[str]:
    """
    Candidate labels for an event.

    A closed pull request is checked against all of its labels; a labeled
    event only against the label that was just added.
    """
    if action is ActionKind.CLOSED:
        return list(labels)
    if action is ActionKind.LABELED:
        return [label] if label else []
    if action is ActionKind.OTHER:
        return []
    raise ValueError(f"Unhandled action kind: {action!r}")


def get_backport_base_to_head(
    action: ActionKind,
    label: str | None,
    labels: list[str],
    pull_request_number: int,
) -> dict[str, str]:
    """
    Map each requested base branch to the head branch to create.

    Labels that don't match are ignored. When two labels name the same base,
    the later one wins.

    Returns:
        Mapping of base to head; empty when nothing is to be backported
    """
    base_to_head: dict[str, str] = {}
    for name in get_label_names(action, label, labels):
        match = LABEL_PATTERN.match(name)
        if match is None:
            continue
        base, head = match.groups()
        # TODO: decide whether a second label for the same base should be
        # reported instead of silently replacing the first head.
        base_to_head[base] = head or default_head(pull_request_number, base)
    return base_to_head


def backport_targets(event: PullRequestEvent) -> dict[str, str]:
    """Base-to-head mapping requested by an event."""
    return get_backport_base_to_head(
        event.action, event.label, event.labels, event.number
    )
