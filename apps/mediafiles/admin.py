from django.contrib import admin

from .models import FileAssetRecord


@admin.register(FileAssetRecord)
class FileAssetRecordAdmin(admin.ModelAdmin):
    list_display = ['original_name', 'stored_path', 'size', 'media_type', 'purpose', 'related_id', 'created_at']
    list_filter = ['purpose', 'media_type']
    search_fields = ['original_name', 'stored_name', 'stored_path']
    readonly_fields = [field.name for field in FileAssetRecord._meta.fields]

    def has_change_permission(self, request, obj=None):
        return False
