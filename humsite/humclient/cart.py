import json
from dataclasses import dataclass, replace

from .money import format_vnd


@dataclass(frozen=True)
class CartItem:
    id: str
    name: str
    price: int
    quantity: int = 1
    customization: dict | None = None  # {"schemaId": ..., "selections": {...}}

    @property
    def key(self):
        """Cùng món + cùng tùy chọn thì gộp chung 1 dòng"""
        key = str(self.id)
        if self.customization:
            selections = json.dumps(self.customization.get('selections'), separators=(',', ':'), ensure_ascii=False)
            key += f"-{self.customization.get('schemaId')}-{selections}"
        return key


class Cart:
    """Giỏ hàng trong bộ nhớ, không lưu lại"""

    def __init__(self):
        self.items = []

    def add(self, id, name, price, quantity=None, customization=None):
        new_item = CartItem(str(id), name, price, quantity or 1, customization)
        for index, item in enumerate(self.items):
            if item.key == new_item.key:
                self.items[index] = replace(item, quantity=item.quantity + new_item.quantity)
                return self.items[index]
        self.items.append(new_item)
        return new_item

    def remove(self, id):
        self.items = [item for item in self.items if item.id != str(id)]

    def update_quantity(self, id, quantity):
        if quantity <= 0:
            self.remove(id)
            return
        self.items = [replace(item, quantity=quantity) if item.id == str(id) else item for item in self.items]

    def clear(self):
        self.items = []

    @property
    def total_items(self):
        return sum(item.quantity for item in self.items)

    @property
    def total_price(self):
        return sum(item.price * item.quantity for item in self.items)

    def summary(self):
        return f"{self.total_items} món - {format_vnd(self.total_price)}"

    def to_order_items(self):
        """Payload `items` cho POST /api/orders"""
        return [
            {
                'menuItemId': int(item.id),
                'quantity': item.quantity,
                'customization': item.customization,
            }
            for item in self.items
        ]
