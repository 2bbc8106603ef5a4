"""
Permissions Constants — **Single Source of Truth**

Every permission referenced in code (services, access policies,
``setup_rbac``) MUST use one of the constants defined here.

Organisation
------------
- **Standard CRUD** permissions follow Django's auto-generated naming:
  ``<action>_<model_lowercase>``. They are listed here for reference so
  that the ``setup_rbac`` command can map them to roles without typos.

- **Custom workflow** permissions are constants that map to codenames
  registered via each model's ``Meta.permissions`` tuple. Adding a new
  custom permission requires:
    1. Add the constant below.
    2. Add the ``(codename, description)`` to the related model's
       ``Meta.permissions``.
    3. Run ``makemigrations`` + ``migrate`` to insert it into Django's
       ``auth_permission`` table.
    4. Add the constant to the appropriate role lists in ``setup_rbac``.

All constants store the **codename only** (no ``app_label.`` prefix).
Use ``full_perm()`` to build the ``app_label.codename`` string that
``User.has_perm`` expects.
"""


def full_perm(app_label: str, codename: str) -> str:
    """Return the ``app_label.codename`` form used by ``has_perm``."""
    return f"{app_label}.{codename}"


# ════════════════════════════════════════════════════════════════════
#  ACCOUNTS APP — Standard CRUD
# ════════════════════════════════════════════════════════════════════

class AccountsPerms:
    """Standard CRUD permissions for accounts models."""

    APP_LABEL = "accounts"

    # Role
    VIEW_ROLE = "view_role"
    ADD_ROLE = "add_role"
    CHANGE_ROLE = "change_role"
    DELETE_ROLE = "delete_role"

    # User
    VIEW_USER = "view_user"
    ADD_USER = "add_user"
    CHANGE_USER = "change_user"
    DELETE_USER = "delete_user"

    # ── Custom workflow permissions ─────────────────────────────────
    CAN_MANAGE_USERS = "can_manage_users"
    """Admin-level user management (activate, deactivate, assign roles)."""


# ════════════════════════════════════════════════════════════════════
#  PROJECTS APP — Standard CRUD + Custom Workflow
# ════════════════════════════════════════════════════════════════════

class ProjectsPerms:
    """Standard + custom permissions for the projects app."""

    APP_LABEL = "projects"

    # ── Project — standard CRUD ─────────────────────────────────────
    VIEW_PROJECT = "view_project"
    ADD_PROJECT = "add_project"
    CHANGE_PROJECT = "change_project"
    DELETE_PROJECT = "delete_project"

    # ── Custom workflow permissions ─────────────────────────────────
    CAN_MANAGE_PROJECTS = "can_manage_projects"
    """Admin-level project access: every project, reward fields included."""

    CAN_MARK_REWARD_DISTRIBUTED = "can_mark_reward_distributed"
    """Flag a project's reward as paid out (freezes its distribution)."""


# ════════════════════════════════════════════════════════════════════
#  REWARDS APP — Standard CRUD + Custom Workflow
# ════════════════════════════════════════════════════════════════════

class RewardsPerms:
    """Standard + custom permissions for the rewards app."""

    APP_LABEL = "rewards"

    # ── RewardDistribution — standard CRUD ──────────────────────────
    VIEW_REWARDDISTRIBUTION = "view_rewarddistribution"
    ADD_REWARDDISTRIBUTION = "add_rewarddistribution"
    CHANGE_REWARDDISTRIBUTION = "change_rewarddistribution"
    DELETE_REWARDDISTRIBUTION = "delete_rewarddistribution"

    # ── Custom workflow permissions ─────────────────────────────────
    CAN_MANAGE_REWARD_DISTRIBUTION = "can_manage_reward_distribution"
    """Create or overwrite a project's reward distribution."""

    CAN_VIEW_ALL_REWARDS = "can_view_all_rewards"
    """Read any user's reward summary, not just one's own."""


# ════════════════════════════════════════════════════════════════════
#  CORE APP — Standard CRUD
# ════════════════════════════════════════════════════════════════════

class CorePerms:
    """Standard CRUD permissions for core models."""

    APP_LABEL = "core"

    # ── Notification — standard CRUD ────────────────────────────────
    VIEW_NOTIFICATION = "view_notification"
    ADD_NOTIFICATION = "add_notification"
    CHANGE_NOTIFICATION = "change_notification"
    DELETE_NOTIFICATION = "delete_notification"
