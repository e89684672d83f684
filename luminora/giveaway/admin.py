from django.contrib import admin

from .models import Giveaway, Participant


class ParticipantInline(admin.TabularInline):
    model = Participant
    fields = ['name', 'ref_count', 'joined_at', 'ip']
    readonly_fields = fields
    extra = 0


@admin.register(Giveaway)
class GiveawayAdmin(admin.ModelAdmin):
    list_display = ['title', 'host', 'end_time', 'creator_ip', 'status']
    search_fields = ['title', 'host']
    inlines = [ParticipantInline]


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    list_display = ['name', 'giveaway', 'ref_count', 'joined_at']
    list_filter = ['giveaway']
    search_fields = ['name']
