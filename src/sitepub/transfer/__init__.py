"""Transfer layer — the narrow seam between publishing and the network.

The deploy service only sees :class:`Transfer`; production wires in
:class:`RsyncTransfer`, tests wire in recording fakes.
"""

from sitepub.transfer.base import MirrorRequest, Transfer, TransferError, TransferOutcome
from sitepub.transfer.rsync import RsyncTransfer

__all__ = [
    "MirrorRequest",
    "RsyncTransfer",
    "Transfer",
    "TransferError",
    "TransferOutcome",
]
