from apps.invitations.models import Invitation
from apps.lists.services import user_snippet


def invitation_snapshot(invitation: Invitation) -> dict:
    """Plain-dict view of an invitation for event payloads."""
    group = invitation.group if invitation.group_id else None
    return {
        'id': str(invitation.id),
        'type': invitation.type,
        'status': invitation.status,
        'message': invitation.message,
        'group_id': str(group.id) if group else None,
        'group_name': group.name if group else (invitation.group_name or None),
        'from_user': user_snippet(invitation.from_user),
        'to_user_id': str(invitation.to_user_id) if invitation.to_user_id else None,
        'created_at': invitation.created_at.isoformat() if invitation.created_at else None,
        'expires_at': invitation.expires_at.isoformat() if invitation.expires_at else None,
    }
