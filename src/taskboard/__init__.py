"""Taskboard — team task-management backend.

Users register, form teams, add members, and create and assign tasks
scoped to a team. Team membership gates every task operation.
"""

__version__ = "0.1.0"
