from django.contrib import admin

from .models import Referral


@admin.register(Referral)
class ReferralAdmin(admin.ModelAdmin):
    list_display = ['participant', 'giveaway', 'created_at']
    list_filter = ['giveaway']
