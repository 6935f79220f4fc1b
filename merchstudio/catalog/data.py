"""
Option Catalog Data

Static product archetypes, material presets, sizing systems and standard
colors. Values are production costs (EUR) before margin.
"""

from typing import Dict, List

from .models import (
    Archetype,
    ColorOption,
    MaterialOption,
    MaterialTier,
    ProductCategory,
    SizeType,
)


# ===== Sizing systems =====

APPAREL_SIZES: Dict[str, List[str]] = {
    "standard": ["XS", "S", "M", "L", "XL", "2XL", "3XL"],
    "extended": ["XS", "S", "M", "L", "XL", "2XL", "3XL", "4XL", "5XL"],
    "youth": ["YS", "YM", "YL", "YXL"],
}

NUMERIC_SIZES: List[str] = ["6", "7", "8", "9", "10", "11", "12", "13", "14"]

# Per-archetype sizes for the "dimensions" and "volume" size types
ARCHETYPE_SIZES: Dict[str, List[str]] = {
    "poster": ["12x18", "18x24", "24x36"],
    "canvas": ["12x16", "18x24", "24x36"],
    "throw-pillow": ["14x14", "16x16", "18x18"],
    "blanket": ["30x40", "50x60", "60x80"],
    "phone-case": ["iPhone 14", "iPhone 15", "iPhone 15 Pro", "Samsung S24"],
    "laptop-sleeve": ['13"', '15"', '17"'],
    "mug": ["11oz", "15oz"],
    "tumbler": ["20oz", "30oz"],
    "water-bottle": ["24oz", "32oz"],
}

ONE_SIZE = "One Size"


# ===== Colors =====

STANDARD_COLORS: List[ColorOption] = [
    ColorOption(id="black", name="Black", hex="#000000"),
    ColorOption(id="white", name="White", hex="#FFFFFF"),
    ColorOption(id="navy", name="Navy", hex="#1a2744"),
    ColorOption(id="charcoal", name="Charcoal", hex="#36454F"),
    ColorOption(id="heather-grey", name="Heather Grey", hex="#9CA3AF"),
    ColorOption(id="forest", name="Forest Green", hex="#228B22"),
    ColorOption(id="burgundy", name="Burgundy", hex="#800020"),
    ColorOption(id="royal", name="Royal Blue", hex="#4169E1"),
]


# ===== Material presets =====

def _material(id: str, name: str, tier: str, multiplier: str, description: str, **extra) -> MaterialOption:
    return MaterialOption(
        id=id,
        name=name,
        tier=MaterialTier(tier),
        price_multiplier=multiplier,
        description=description,
        **extra,
    )


MATERIAL_PRESETS: Dict[str, List[MaterialOption]] = {
    "cotton": [
        _material("cotton-standard", "Cotton Blend", "standard", "1.0", "50/50 cotton-poly blend",
                  composition="50% Cotton, 50% Polyester", weight="180gsm"),
        _material("cotton-premium", "Ring-Spun Cotton", "premium", "1.3", "Soft ring-spun cotton",
                  composition="100% Ring-Spun Cotton", weight="200gsm"),
        _material("cotton-luxury", "Organic Cotton", "luxury", "1.6", "GOTS certified organic",
                  composition="100% Organic Cotton", weight="220gsm"),
    ],
    "fleece": [
        _material("fleece-standard", "Fleece Blend", "standard", "1.0", "Standard fleece",
                  composition="50% Cotton, 50% Polyester", weight="280gsm"),
        _material("fleece-premium", "French Terry", "premium", "1.4", "Premium French terry",
                  composition="80% Cotton, 20% Polyester", weight="320gsm"),
        _material("fleece-luxury", "Heavyweight Fleece", "luxury", "1.8", "Ultra-soft heavyweight",
                  composition="100% Cotton", weight="400gsm"),
    ],
    "canvas": [
        _material("canvas-standard", "Cotton Canvas", "standard", "1.0", "Durable canvas",
                  composition="100% Cotton Canvas", weight="12oz"),
        _material("canvas-premium", "Heavy Canvas", "premium", "1.3", "Heavy-duty canvas",
                  composition="100% Cotton Canvas", weight="16oz"),
    ],
    "ceramic": [
        _material("ceramic-standard", "Ceramic", "standard", "1.0", "Standard ceramic"),
        _material("ceramic-premium", "Premium Ceramic", "premium", "1.5", "High-gloss finish"),
    ],
}


# ===== Archetypes =====

def _archetype(id: str, name: str, category: str, base_price: str, materials: List[MaterialOption],
               has_gender: bool = False, has_sizes: bool = False,
               size_type: str = "one-size", description: str = "") -> Archetype:
    return Archetype(
        id=id,
        name=name,
        category=ProductCategory(category),
        has_gender=has_gender,
        has_sizes=has_sizes,
        size_type=SizeType(size_type),
        materials=materials,
        base_price=base_price,
        description=description,
    )


PRODUCT_CATALOG: List[Archetype] = [
    # APPAREL
    _archetype("hoodie", "Hoodie", "apparel", "45.00", MATERIAL_PRESETS["fleece"],
               has_gender=True, has_sizes=True, size_type="apparel",
               description="Premium pullover hoodie with kangaroo pocket"),
    _archetype("t-shirt", "T-Shirt", "apparel", "24.00", MATERIAL_PRESETS["cotton"],
               has_gender=True, has_sizes=True, size_type="apparel",
               description="Classic crew neck tee"),
    _archetype("tank-top", "Tank Top", "apparel", "22.00", MATERIAL_PRESETS["cotton"],
               has_gender=True, has_sizes=True, size_type="apparel"),
    _archetype("long-sleeve", "Long Sleeve", "apparel", "28.00", MATERIAL_PRESETS["cotton"],
               has_gender=True, has_sizes=True, size_type="apparel"),
    _archetype("sweatshirt", "Sweatshirt", "apparel", "38.00", MATERIAL_PRESETS["fleece"],
               has_gender=True, has_sizes=True, size_type="apparel"),
    _archetype("zip-hoodie", "Zip Hoodie", "apparel", "52.00", MATERIAL_PRESETS["fleece"],
               has_gender=True, has_sizes=True, size_type="apparel"),
    _archetype("crop-top", "Crop Top", "apparel", "26.00", MATERIAL_PRESETS["cotton"],
               has_sizes=True, size_type="apparel"),

    # ACCESSORIES
    _archetype("cap", "Dad Cap", "accessories", "24.00", [
        _material("twill", "Cotton Twill", "standard", "1.0", "Classic cotton twill"),
        _material("corduroy", "Corduroy", "premium", "1.3", "Vintage corduroy"),
    ]),
    _archetype("snapback", "Snapback", "accessories", "28.00", [
        _material("acrylic", "Acrylic Blend", "standard", "1.0", "Structured fit"),
    ]),
    _archetype("beanie", "Beanie", "accessories", "22.00", [
        _material("acrylic", "Acrylic Knit", "standard", "1.0", "Warm acrylic"),
        _material("merino", "Merino Wool", "luxury", "2.0", "Premium merino"),
    ]),
    _archetype("bandana", "Bandana", "accessories", "14.00", [
        _material("cotton", "Cotton", "standard", "1.0", "100% cotton"),
    ]),
    _archetype("socks", "Crew Socks", "accessories", "16.00", [
        _material("cotton-blend", "Cotton Blend", "standard", "1.0", "Comfortable blend"),
    ], has_sizes=True, size_type="numeric"),

    # BAGS
    _archetype("tote-bag", "Tote Bag", "bags", "18.00", MATERIAL_PRESETS["canvas"]),
    _archetype("backpack", "Backpack", "bags", "45.00", [
        _material("nylon", "Nylon", "standard", "1.0", "Durable nylon"),
    ]),
    _archetype("fanny-pack", "Fanny Pack", "bags", "28.00", [
        _material("nylon", "Nylon", "standard", "1.0", "Water-resistant"),
    ]),

    # DRINKWARE
    _archetype("mug", "Ceramic Mug", "drinkware", "14.00", MATERIAL_PRESETS["ceramic"],
               size_type="volume"),
    _archetype("tumbler", "Tumbler", "drinkware", "28.00", [
        _material("stainless", "Stainless Steel", "premium", "1.0", "Double-wall insulated"),
    ], size_type="volume"),

    # HOME DECOR
    _archetype("poster", "Poster", "home-decor", "18.00", [
        _material("matte", "Matte Paper", "standard", "1.0", "200gsm matte"),
        _material("lustre", "Lustre Paper", "premium", "1.3", "Semi-gloss lustre"),
    ], has_sizes=True, size_type="dimensions"),
    _archetype("canvas", "Canvas Print", "home-decor", "45.00", [
        _material("canvas", "Gallery Canvas", "premium", "1.0", "Gallery-wrapped"),
    ], has_sizes=True, size_type="dimensions"),
    _archetype("blanket", "Throw Blanket", "home-decor", "55.00", [
        _material("fleece", "Fleece", "standard", "1.0", "Soft fleece"),
        _material("sherpa", "Sherpa", "premium", "1.5", "Sherpa-lined"),
    ], has_sizes=True, size_type="dimensions"),

    # TECH
    _archetype("phone-case", "Phone Case", "tech", "22.00", [
        _material("snap", "Snap Case", "standard", "1.0", "Slim snap-on"),
        _material("tough", "Tough Case", "premium", "1.4", "Dual-layer protection"),
    ], has_sizes=True, size_type="dimensions"),
    _archetype("mousepad", "Mousepad", "tech", "14.00", [
        _material("rubber", "Rubber Base", "standard", "1.0", "Non-slip rubber"),
    ]),

    # STATIONERY
    _archetype("sticker-sheet", "Sticker Sheet", "stationery", "8.00", [
        _material("vinyl", "Vinyl", "standard", "1.0", "Waterproof vinyl"),
        _material("holographic", "Holographic", "premium", "1.5", "Holographic vinyl"),
    ]),
    _archetype("notebook", "Notebook", "stationery", "16.00", [
        _material("spiral", "Spiral Bound", "standard", "1.0", "80 pages"),
        _material("hardcover", "Hardcover", "premium", "1.6", "120 pages"),
    ]),
]

CATEGORY_LABELS: Dict[ProductCategory, str] = {
    ProductCategory.APPAREL: "Apparel",
    ProductCategory.ACCESSORIES: "Accessories",
    ProductCategory.BAGS: "Bags & Packs",
    ProductCategory.DRINKWARE: "Drinkware",
    ProductCategory.HOME_DECOR: "Home & Décor",
    ProductCategory.TECH: "Tech Accessories",
    ProductCategory.STATIONERY: "Stationery",
    ProductCategory.LIFESTYLE: "Lifestyle",
}
