from rest_framework import serializers


class StatsSerializer(serializers.Serializer):
    totalGiveaways = serializers.IntegerField()
    totalParticipants = serializers.IntegerField()
    activeGiveaways = serializers.IntegerField()
    endedGiveaways = serializers.IntegerField()
    totalReferrals = serializers.IntegerField()


class HealthSerializer(serializers.Serializer):
    status = serializers.CharField()
    timestamp = serializers.IntegerField()
    service = serializers.CharField()
    version = serializers.CharField()


class BlockIPSerializer(serializers.Serializer):
    token = serializers.CharField(style={'input_type': 'password'})
    ip = serializers.IPAddressField()
