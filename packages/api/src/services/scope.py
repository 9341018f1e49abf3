# This project was developed with assistance from AI tools.
"""Shared data scope filtering for service queries.

Centralizes the DataScope -> SQL WHERE logic so that each resource service
applies the same rules. ``join_to_applicant`` covers child-entity queries
(Documents) that must reach the Applicant row to be filtered.
"""

from db import Applicant

from ..schemas.auth import DataScope


def apply_data_scope(stmt, scope: DataScope, *, join_to_applicant=None):
    """Apply data scope filtering to a SQLAlchemy query.

    Args:
        stmt: A SQLAlchemy select statement.
        scope: The caller's DataScope.
        join_to_applicant: ORM relationship attribute to join to reach
            Applicant (e.g., ``Document.applicant``). Pass ``None``
            when querying Applicant directly.

    Returns:
        The filtered statement.
    """
    if scope.full_pipeline:
        return stmt

    if join_to_applicant is not None:
        stmt = stmt.join(join_to_applicant)

    if scope.own_data_only and scope.user_id:
        return stmt.where(Applicant.user_id == scope.user_id)
    if scope.partner_id:
        return stmt.where(Applicant.partner_id == scope.partner_id)

    # No recognized scope: match nothing rather than everything.
    return stmt.where(Applicant.id.is_(None))
