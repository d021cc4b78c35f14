"""Derivation of an approval request's final status from its level statuses."""

from signoff.models.enums import ApprovalStatus

# (level1_status, requires_level2, level2_status) -> final_status
_FINAL_STATUS = {
    (ApprovalStatus.APPROVED, True, ApprovalStatus.PENDING): ApprovalStatus.PENDING,
    (ApprovalStatus.APPROVED, True, ApprovalStatus.APPROVED): ApprovalStatus.APPROVED,
    (ApprovalStatus.APPROVED, True, ApprovalStatus.REJECTED): ApprovalStatus.REJECTED,
}


def derive_final_status(
    requires_level2: bool,
    level1_status: str,
    level2_status: str | None,
) -> ApprovalStatus:
    """Return the externally visible outcome for a request.

    Every write path that touches a level status must persist the value
    returned here; ``final_status`` is never set any other way.

    ===========  ===============  ===========  ========
    level 1      requires level2  level 2      final
    ===========  ===============  ===========  ========
    pending      any              any          pending
    rejected     any              any          rejected
    approved     False            any          approved
    approved     True             pending      pending
    approved     True             approved     approved
    approved     True             rejected     rejected
    ===========  ===============  ===========  ========
    """
    level1 = ApprovalStatus(level1_status)
    if level1 != ApprovalStatus.APPROVED:
        return level1
    if not requires_level2:
        return ApprovalStatus.APPROVED
    level2 = ApprovalStatus(level2_status or ApprovalStatus.PENDING)
    return _FINAL_STATUS[(level1, True, level2)]
