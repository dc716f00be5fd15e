from rest_framework import serializers

from apps.menus.models import MenuItem


class MenuItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = MenuItem
        fields = ["id", "name", "description", "price", "category", "image", "available"]


class MenuCategorySerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()


class MenuSerializer(serializers.Serializer):
    categories = MenuCategorySerializer(many=True)
    items = MenuItemSerializer(many=True)
    grouped = serializers.DictField(child=MenuItemSerializer(many=True))
