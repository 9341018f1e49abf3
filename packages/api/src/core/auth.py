# This project was developed with assistance from AI tools.
"""Pure auth utility functions with no FastAPI or HTTP dependencies.

Used by the auth middleware to turn a validated token into a UserContext.
"""

from db.enums import UserRole

from ..schemas.auth import DataScope


def build_data_scope(role: UserRole, user_id: str) -> DataScope:
    """Build data scope rules based on the user's role."""
    if role == UserRole.PARTNER:
        return DataScope(partner_id=user_id)
    if role == UserRole.APPLICANT:
        return DataScope(own_data_only=True, user_id=user_id)
    if role in (UserRole.ADMIN, UserRole.TEAM_MEMBER):
        return DataScope(full_pipeline=True)
    return DataScope()
