from __future__ import annotations

from decimal import Decimal

SAMPLE_MENU = [
    {"name": "Paneer Tikka", "category": "Starters", "type": "veg", "price": Decimal("220.00"), "prep_time": 20,
     "description": "Cottage cheese cubes marinated in spiced yoghurt and grilled in the tandoor."},
    {"name": "Chicken 65", "category": "Starters", "type": "non-veg", "price": Decimal("260.00"), "prep_time": 18,
     "description": "Crisp fried chicken tossed with curry leaves and red chilli."},
    {"name": "Tomato Soup", "category": "Soups", "type": "veg", "price": Decimal("120.00"), "prep_time": 10},
    {"name": "Margherita Pizza", "category": "Pizza", "type": "veg", "price": Decimal("299.00"), "prep_time": 20,
     "description": "Tomato, mozzarella and basil."},
    {"name": "Veg Hakka Noodles", "category": "Noodles", "type": "veg", "price": Decimal("180.00"), "prep_time": 15},
    {"name": "Dal Makhani", "category": "Dals", "type": "veg", "price": Decimal("210.00"), "prep_time": 15},
    {"name": "Butter Naan", "category": "Breads", "type": "veg", "price": Decimal("50.00"), "prep_time": 8},
    {"name": "Chicken Biryani", "category": "Rice / Pulao / Biryanis / Raitas", "type": "non-veg",
     "price": Decimal("320.00"), "prep_time": 25},
    {"name": "Masala Dosa", "category": "Dosas", "type": "veg", "price": Decimal("140.00"), "prep_time": 12},
    {"name": "Gulab Jamun", "category": "Sweets", "type": "veg", "price": Decimal("90.00"), "prep_time": 5},
    {"name": "Fresh Lime Soda", "category": "Beverages", "type": "veg", "price": Decimal("80.00"), "prep_time": 5},
    {"name": "Masala Chai", "category": "Tea & Coffee", "type": "veg", "price": Decimal("40.00"), "prep_time": 5},
]
