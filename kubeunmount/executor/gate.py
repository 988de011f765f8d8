"""Confirmation gate: a real run needs both ``dry_run=False`` and ``confirmed=True``."""

from __future__ import annotations

from kubeunmount.errors import ConfirmationRequiredError


def should_mutate(dry_run: bool, confirmed: bool) -> bool:
    return not dry_run and confirmed


def check_confirmation(dry_run: bool, confirmed: bool) -> None:
    """Raise ConfirmationRequiredError for an unconfirmed real run.

    A dry run always passes: it never mutates, confirmed or not.
    """
    if not dry_run and not confirmed:
        raise ConfirmationRequiredError()
