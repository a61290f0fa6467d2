"""Example provider built as a class, keeping its items in the state store."""

from pydantic import BaseModel


class Item(BaseModel):
    """An inventory item."""

    sku: str
    quantity: int = 0


class InventoryProvider:
    """Stores items in the provider's private state scope.

    Register it with ``{"locator": "inventory:InventoryProvider"}`` or as a
    preloaded instance. ``list_items`` is public; ``add_item`` requires the
    ambient security middleware.
    """

    name = "inventory"
    version = "0.2.0"

    def __init__(self) -> None:
        self.state = None
        self.endpoints = [
            {"route": "/items", "method": "get", "handler": self.list_items, "security": None},
            {"route": "/items", "method": "post", "handler": self.add_item},
        ]

    async def setup(self, environment, registry):
        self.state = environment.state

    async def list_items(self, request):
        items = await self.state.get("items", {})
        return {"items": sorted(items.values(), key=lambda item: item["sku"])}

    async def add_item(self, request):
        item = Item.model_validate(request.body)
        items = dict(await self.state.get("items", {}))
        items[item.sku] = item.model_dump()
        await self.state.set("items", items)
        return item.model_dump()
