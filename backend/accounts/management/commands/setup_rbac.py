"""
Management command: setup_rbac
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Seeds the database with the studio **Roles** and links each role to its
set of Django permissions.

Key design principle — **this command does NOT create Permission objects**.
Permissions must already exist in the database:
    • Standard CRUD permissions are auto-created by Django after
      ``migrate`` (one per model × {add, change, delete, view}).
    • Custom workflow permissions are declared in each model's
      ``Meta.permissions`` tuple and inserted by ``migrate``.

The command is **idempotent** — safe to run multiple times.  Existing
roles are updated; permissions are replaced (set) to match the
mapping below.

Usage::

    python manage.py setup_rbac
"""

from django.contrib.auth.models import Permission
from django.core.management.base import BaseCommand

from accounts.models import Role
from core.permissions_constants import (
    AccountsPerms,
    CorePerms,
    ProjectsPerms,
    RewardsPerms,
)

_A = AccountsPerms.APP_LABEL
_C = CorePerms.APP_LABEL
_P = ProjectsPerms.APP_LABEL
_R = RewardsPerms.APP_LABEL

# Every member reads and dismisses their own notifications.
_MEMBER_BASE: list[tuple[str, str]] = [
    (_C, CorePerms.VIEW_NOTIFICATION),
    (_C, CorePerms.CHANGE_NOTIFICATION),
    (_P, ProjectsPerms.VIEW_PROJECT),
    (_R, RewardsPerms.VIEW_REWARDDISTRIBUTION),
]

# ────────────────────────────────────────────────────────────────────
# Role → Permission mapping  (uses constants — zero hard-coded strings)
# ────────────────────────────────────────────────────────────────────
# Key:   (role_name, description, hierarchy_level)
# Value: list of (app_label, codename) pairs

ROLE_PERMISSIONS_MAP: dict[tuple[str, str, int], list[tuple[str, str]]] = {

    # ── Administrator ───────────────────────────────────────────────
    (
        "Admin",
        "Studio operator — manages members, projects and reward payouts.",
        100,
    ): [
        # Accounts
        (_A, AccountsPerms.VIEW_ROLE), (_A, AccountsPerms.ADD_ROLE),
        (_A, AccountsPerms.CHANGE_ROLE), (_A, AccountsPerms.DELETE_ROLE),
        (_A, AccountsPerms.VIEW_USER), (_A, AccountsPerms.ADD_USER),
        (_A, AccountsPerms.CHANGE_USER), (_A, AccountsPerms.DELETE_USER),
        (_A, AccountsPerms.CAN_MANAGE_USERS),
        # Projects
        (_P, ProjectsPerms.VIEW_PROJECT), (_P, ProjectsPerms.ADD_PROJECT),
        (_P, ProjectsPerms.CHANGE_PROJECT), (_P, ProjectsPerms.DELETE_PROJECT),
        (_P, ProjectsPerms.CAN_MANAGE_PROJECTS),
        (_P, ProjectsPerms.CAN_MARK_REWARD_DISTRIBUTED),
        # Rewards
        (_R, RewardsPerms.VIEW_REWARDDISTRIBUTION), (_R, RewardsPerms.ADD_REWARDDISTRIBUTION),
        (_R, RewardsPerms.CHANGE_REWARDDISTRIBUTION), (_R, RewardsPerms.DELETE_REWARDDISTRIBUTION),
        (_R, RewardsPerms.CAN_MANAGE_REWARD_DISTRIBUTION),
        (_R, RewardsPerms.CAN_VIEW_ALL_REWARDS),
        # Core
        (_C, CorePerms.VIEW_NOTIFICATION), (_C, CorePerms.ADD_NOTIFICATION),
        (_C, CorePerms.CHANGE_NOTIFICATION), (_C, CorePerms.DELETE_NOTIFICATION),
    ],

    # ── Director ────────────────────────────────────────────────────
    (
        "Director",
        "Leads project delivery; earns the director share.",
        30,
    ): list(_MEMBER_BASE),

    # ── Sales ───────────────────────────────────────────────────────
    (
        "Sales",
        "Brings in client work; earns the sales share.",
        20,
    ): list(_MEMBER_BASE),

    # ── Creator ─────────────────────────────────────────────────────
    (
        "Creator",
        "Designer, developer, writer or videographer assigned to projects.",
        10,
    ): list(_MEMBER_BASE),
}


class Command(BaseCommand):
    help = (
        "Seeds the database with the studio Roles and maps each role to its "
        "Django permissions.  Safe to run multiple times (idempotent).  "
        "Does NOT create permissions — run `migrate` first."
    )

    def handle(self, *args, **options):
        self.stdout.write(self.style.MIGRATE_HEADING(
            "\n══════════════════════════════════════════"
            "\n  RBAC Setup — Seeding Roles & Permissions"
            "\n══════════════════════════════════════════\n"
        ))

        # Pre-fetch ALL permissions into a dict for fast look-up
        all_permissions: dict[tuple[str, str], Permission] = {
            (p.content_type.app_label, p.codename): p
            for p in Permission.objects.select_related("content_type").all()
        }

        roles_created = 0
        roles_updated = 0
        warnings = 0

        for (role_name, description, hierarchy_level), perm_keys in ROLE_PERMISSIONS_MAP.items():
            # ── 1. Idempotent role creation / update ────────────────
            role, created = Role.objects.update_or_create(
                name=role_name,
                defaults={
                    "description": description,
                    "hierarchy_level": hierarchy_level,
                },
            )

            # ── 2. Resolve permission codenames ─────────────────────
            resolved_permissions: list[Permission] = []
            for key in perm_keys:
                perm = all_permissions.get(key)
                if perm is not None:
                    resolved_permissions.append(perm)
                else:
                    warnings += 1
                    self.stdout.write(self.style.WARNING(
                        f"  ⚠  Permission '{key[0]}.{key[1]}' not found — "
                        f"skipped for role '{role_name}'.  "
                        f"(Run migrate first?)"
                    ))

            # ── 3. Set permissions (replaces old set entirely) ──────
            role.permissions.set(resolved_permissions)

            action = "Created" if created else "Updated"
            if created:
                roles_created += 1
            else:
                roles_updated += 1

            self.stdout.write(self.style.SUCCESS(
                f"  ✔  {action} role: {role_name:<10s} "
                f"(hierarchy={hierarchy_level}, "
                f"permissions={len(resolved_permissions)})"
            ))

        # ── Summary ─────────────────────────────────────────────────
        self.stdout.write(self.style.MIGRATE_HEADING(
            "\n──────────────────────────────────────────"
        ))
        summary = (
            f"  Done!  {roles_created} role(s) created, "
            f"{roles_updated} role(s) updated.  "
            f"Total: {roles_created + roles_updated} role(s)."
        )
        if warnings:
            summary += f"  ({warnings} permission warning(s) — see above.)"
        self.stdout.write(self.style.SUCCESS(summary + "\n"))
