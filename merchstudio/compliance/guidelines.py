"""
Brand Guidelines

Read-only brand books a draft is validated against. Each guideline lists
its approved colors, mascots, product types with their fabric / stroke
palettes, and the written rules shown on the checklist.

Guidelines are frozen; nothing in the workflow mutates them.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from merchstudio.draft.models import BrandIdentity, ColorLine

GUIDELINES_VERSION = "brand_books_v2"

# Stroke color produced by each color line
COLOR_LINE_STROKES: Dict[ColorLine, str] = {
    ColorLine.GREEN_LINE: "green",
    ColorLine.WHITE_LINE: "white",
}


class ApprovedColor(BaseModel):
    name: str
    hex: str
    usage: str = ""

    class Config:
        frozen = True


class ApprovedMascot(BaseModel):
    id: str
    display_name: str
    personality: str = ""
    approved_for_apparel: bool = True

    class Config:
        frozen = True


class ApprovedProduct(BaseModel):
    """A product type the brand book allows, with its print palette."""
    archetype_id: str
    placement: str = ""
    print_size: str = ""
    fabric_colors: List[str] = Field(default_factory=list)
    stroke_colors: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class GuidelineRule(BaseModel):
    """Written brand rule, shown to the designer alongside the checklist."""
    id: str
    name: str
    description: str
    required: bool = True

    class Config:
        frozen = True


class BrandGuideline(BaseModel):
    """
    One brand book.

    approved_products == None means every catalog archetype is allowed and
    no palette restriction applies.
    """
    brand: BrandIdentity
    name: str
    description: str = ""
    version: str = GUIDELINES_VERSION
    has_mascots: bool = False
    requires_color_line: bool = False
    colors: List[ApprovedColor] = Field(default_factory=list)
    mascots: List[ApprovedMascot] = Field(default_factory=list)
    approved_products: Optional[List[ApprovedProduct]] = None
    rules: List[GuidelineRule] = Field(default_factory=list)
    forbidden: List[str] = Field(default_factory=list)

    class Config:
        frozen = True

    def mascot(self, mascot_id: str) -> Optional[ApprovedMascot]:
        for m in self.mascots:
            if m.id == mascot_id:
                return m
        return None

    def product(self, archetype_id: str) -> Optional[ApprovedProduct]:
        for p in self.approved_products or []:
            if p.archetype_id == archetype_id:
                return p
        return None


TECHNO_DOG_GUIDELINE = BrandGuideline(
    brand=BrandIdentity.TECHNO_DOG,
    name="techno.dog",
    description="VHS/Brutalist aesthetic with industrial influences. Dark backgrounds, minimal design.",
    has_mascots=False,
    requires_color_line=False,
    colors=[
        ApprovedColor(name="background", hex="#000000", usage="Core color"),
        ApprovedColor(name="foreground", hex="#F2F2F2", usage="Core color"),
        ApprovedColor(name="crimson", hex="#DC143C", usage="Accent color"),
    ],
    rules=[
        GuidelineRule(id="dark-bg", name="Dark Backgrounds", description="Always use dark backgrounds (black preferred)"),
        GuidelineRule(id="minimal", name="Minimal Design", description="Brutalist minimalism - no unnecessary elements"),
        GuidelineRule(id="vhs-aesthetic", name="VHS Aesthetic", description="Film grain, scan lines, glitch effects when appropriate", required=False),
        GuidelineRule(id="typography", name="IBM Plex Mono", description="Use IBM Plex Mono for all text"),
        GuidelineRule(id="lowercase", name="Lowercase Text", description='"techno.dog" must always be lowercase'),
        GuidelineRule(id="hexagon-logo", name="Hexagon Logo Only", description="Use geometric hexagon logo - NO dog imagery"),
    ],
    forbidden=[
        "Dog images, icons, or silhouettes",
        "Bright colors or gradients",
        "Non-monospace fonts",
        'Uppercase "techno.dog"',
    ],
)

TECHNO_DOGGIES_GUIDELINE = BrandGuideline(
    brand=BrandIdentity.TECHNO_DOGGIES,
    name="Techno Doggies",
    description="Techno Talkies mascot pack. Stroke-only graphics on black fabric.",
    has_mascots=True,
    requires_color_line=True,
    colors=[
        ApprovedColor(name="Laser Green", hex="#00FF00", usage="Green Line stroke"),
        ApprovedColor(name="Pure White", hex="#FFFFFF", usage="White Line stroke"),
    ],
    mascots=[
        ApprovedMascot(id="happy-dog", display_name="Happy Dog", personality="Upbeat"),
        ApprovedMascot(id="dj-dog", display_name="DJ Dog", personality="Selector"),
        ApprovedMascot(id="ninja-dog", display_name="Ninja Dog", personality="Stealthy"),
        ApprovedMascot(id="space-dog", display_name="Space Dog", personality="Cosmic"),
        ApprovedMascot(id="grumpy-dog", display_name="Grumpy Dog", personality="Deadpan"),
        ApprovedMascot(id="techno-dog", display_name="Techno Dog", personality="Purist"),
        ApprovedMascot(id="dancing-dog", display_name="Dancing Dog", personality="Restless"),
        ApprovedMascot(id="acid-dog", display_name="Acid Dog", personality="Squelchy"),
        ApprovedMascot(id="raving-dog", display_name="Raving Dog", personality="Peak time"),
        ApprovedMascot(id="berghain-dog", display_name="Berghain Dog", personality="Door policy", approved_for_apparel=False),
    ],
    approved_products=[
        ApprovedProduct(
            archetype_id="hoodie",
            placement="Center chest or back print",
            print_size="Medium to large",
            fabric_colors=["black", "charcoal"],
            stroke_colors=["white", "green", "crimson"],
        ),
        ApprovedProduct(
            archetype_id="t-shirt",
            placement="Center chest",
            print_size="Medium",
            fabric_colors=["black", "white"],
            stroke_colors=["white", "green", "black", "crimson"],
        ),
        ApprovedProduct(
            archetype_id="cap",
            placement="Front panel",
            print_size="Small embroidery",
            fabric_colors=["black"],
            stroke_colors=["white", "green"],
        ),
        ApprovedProduct(
            archetype_id="tote-bag",
            placement="Center",
            print_size="Large",
            fabric_colors=["black", "natural"],
            stroke_colors=["white", "black"],
        ),
    ],
    rules=[
        GuidelineRule(id="stroke-only", name="Stroke Only", description="NEVER fill mascots; stroke graphics only"),
        GuidelineRule(id="black-fabric", name="Black Fabric", description="ALWAYS print on dark fabric"),
        GuidelineRule(id="core-variants", name="Core Variants Only", description="ONLY core mascot variants on merchandise"),
        GuidelineRule(id="no-ai-mascots", name="No AI Mascots", description="NEVER use AI-generated or modified mascots"),
    ],
    forbidden=[
        "AI-generated or modified mascots",
        "Non-approved color variations",
        "Filled or gradient mascots",
        "Busy or colorful backgrounds",
    ],
)

GUIDELINES: Dict[BrandIdentity, BrandGuideline] = {
    BrandIdentity.TECHNO_DOG: TECHNO_DOG_GUIDELINE,
    BrandIdentity.TECHNO_DOGGIES: TECHNO_DOGGIES_GUIDELINE,
}


def get_guideline(brand: Optional[BrandIdentity]) -> Optional[BrandGuideline]:
    if brand is None:
        return None
    return GUIDELINES.get(BrandIdentity(brand))


def stroke_color_for(color_line: Optional[ColorLine]) -> Optional[str]:
    if color_line is None:
        return None
    return COLOR_LINE_STROKES.get(ColorLine(color_line))
