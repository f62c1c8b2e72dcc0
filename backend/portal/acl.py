"""Role names and the role groups used by route dependencies.

Keeping the role strings in one place makes it easy to audit who can see
which dashboard.
"""

ROLE_LEARNER = "learner"
ROLE_MANAGER = "manager"
ROLE_ADMIN = "admin"

ALL_ROLES = [ROLE_LEARNER, ROLE_MANAGER, ROLE_ADMIN]

# Team metrics are computed for the caller's own team.
TEAM_METRICS_ROLES = [ROLE_MANAGER]
USER_ADMIN_ROLES = [ROLE_ADMIN]


def is_valid_role(role: str) -> bool:
    return role in ALL_ROLES
