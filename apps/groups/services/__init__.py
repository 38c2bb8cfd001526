"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    GroupNotFoundError,
    NotMemberError,
    AlreadyMemberError,
)

from .membership import (
    is_member,
    add_member,
    remove_member,
    member_count,
    list_groups_of,
    list_members_of,
)

from .group_management import (
    LeaveResult,
    lock_group,
    destroy_group,
    get_member_group,
    get_group_members,
    create_group_with_members,
    update_group,
    disband_group,
    leave_group,
)

from .group_list import (
    get_group_list,
    add_group_item,
    clear_group_list,
)


__all__ = [
    # Exceptions
    'GroupNotFoundError',
    'NotMemberError',
    'AlreadyMemberError',

    # Membership store
    'is_member',
    'add_member',
    'remove_member',
    'member_count',
    'list_groups_of',
    'list_members_of',

    # Group lifecycle
    'LeaveResult',
    'lock_group',
    'destroy_group',
    'get_member_group',
    'get_group_members',
    'create_group_with_members',
    'update_group',
    'disband_group',
    'leave_group',

    # Shared list
    'get_group_list',
    'add_group_item',
    'clear_group_list',
]
