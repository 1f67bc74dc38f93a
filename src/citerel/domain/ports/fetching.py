"""Port for retrieving entries related to a pivot identifier."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from citerel.domain.cancellation import CancellationToken
    from citerel.domain.model import BibEntry


@runtime_checkable
class RelationFetcher(Protocol):
    """Callable port for looking up related entries by DOI.

    Implementations must observe ``token``: once it is cancelled they stop
    promptly and raise ``FetchCancelled``. Transport or payload problems are
    raised as ``FetchError`` after a single attempt.
    """

    async def __call__(
        self,
        identifier: str,
        token: CancellationToken,
    ) -> Sequence[BibEntry]: ...


__all__ = ["RelationFetcher"]
