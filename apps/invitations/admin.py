from django.contrib import admin
from apps.invitations.models import Invitation


@admin.register(Invitation)
class InvitationAdmin(admin.ModelAdmin):
    list_display = ['type', 'status', 'from_user', 'to_user', 'group', 'group_name', 'created_at', 'expires_at']
    list_filter = ['type', 'status', 'created_at']
    search_fields = ['from_user__email', 'to_user__email', 'group__name', 'group_name']
    readonly_fields = ['created_at', 'responded_at']
    date_hierarchy = 'created_at'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('from_user', 'to_user', 'group')
