"""
Genesis preparation errors.

Every failure is fatal. There is no recoverable category: a run either
produces a complete, reconciled genesis or raises one of these.

- InputMalformationError:      a CSV row could not be parsed
- PolicyDefectError:           the configured policy is inconsistent
- DuplicateAddressError:       two non-mergeable sources share an address
- ConservationViolationError:  final supply does not match declared supply
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Sequence


class ErrorKind(str, Enum):
    INPUT_MALFORMATION = "input-malformation"
    POLICY_DEFECT = "policy-defect"
    CONSERVATION_VIOLATION = "conservation-violation"


class GenesisError(Exception):
    kind: ErrorKind = ErrorKind.POLICY_DEFECT

    def __init__(self, message: str, *, expected: Any = None, computed: Any = None) -> None:
        self.message = message
        self.expected = expected
        self.computed = computed
        super().__init__(self._format())

    def _format(self) -> str:
        text = f"[{self.kind.value}] {self.message}"
        if self.expected is not None or self.computed is not None:
            text += f" (expected={self.expected}, computed={self.computed})"
        return text


class InputMalformationError(GenesisError):
    kind = ErrorKind.INPUT_MALFORMATION

    def __init__(
        self,
        message: str,
        *,
        source: str = "",
        row_index: Optional[int] = None,
        value: Any = None,
    ) -> None:
        self.source = source
        self.row_index = row_index
        self.value = value
        where = source
        if row_index is not None:
            where = f"{source}:{row_index}"
        if where:
            message = f"{where}: {message}"
        if value is not None:
            message = f"{message}: {value!r}"
        super().__init__(message)


class PolicyDefectError(GenesisError):
    kind = ErrorKind.POLICY_DEFECT


class DuplicateAddressError(PolicyDefectError):
    def __init__(self, address: str, sources: Sequence[str]) -> None:
        self.address = address
        self.sources = tuple(sources)
        super().__init__(
            f"address {address} appears in more than one non-mergeable source: "
            + ", ".join(self.sources)
        )


class ConservationViolationError(GenesisError):
    kind = ErrorKind.CONSERVATION_VIOLATION
