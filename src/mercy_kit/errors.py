"""Exception hierarchy shared by the generator, validator and base class."""

from __future__ import annotations


class MercyKitError(Exception):
    """Base class for every error raised by the kit."""


class ScaffoldError(MercyKitError):
    """The project generator could not produce an integration."""


class PolicyError(MercyKitError):
    """A validation policy file is missing or malformed."""


class HostCapabilityError(MercyKitError, NotImplementedError):
    """A host-provided capability was called but the host never supplied it."""

    def __init__(self, capability: str, detail: str = "") -> None:
        self.capability = capability
        message = f"'{capability}' must be provided by the M.E.R.C.Y host runtime"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
