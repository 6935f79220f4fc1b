"""
Merch Studio Draft

The Draft aggregate and the actions that change it.

The reducer lives in merchstudio.draft.reducer; it is not re-exported here
because it depends on the workflow package, which itself reads Draft.
"""

from .models import (
    BrandIdentity,
    ColorLine,
    CopyFields,
    Draft,
    DraftStatus,
    EditorialBrief,
    Metafield,
    ProductImage,
    WorkflowFlow,
)
from .actions import (
    MATRIX_ACTIONS,
    NAVIGATION_ACTIONS,
    NON_CONTENT_ACTIONS,
    Action,
    AddDimension,
    AddImage,
    ApplyGeneratedContent,
    GoBack,
    GoNext,
    GoToStep,
    MarkPublished,
    MarkValidated,
    RemoveDimension,
    Reset,
    SaveDraft,
    SelectArchetype,
    SelectBrand,
    SelectGender,
    SelectMascot,
    SelectMaterial,
    SetCollections,
    SetColorLine,
    SetCustomDesign,
    SetEditorialBrief,
    SetMargin,
    SetMetafields,
    SetPricing,
    SetProductType,
    SetSelection,
    SetSkuPolicy,
    SetSkuSeed,
    ToggleValue,
    UpdateCopy,
)

__all__ = [
    "BrandIdentity",
    "ColorLine",
    "CopyFields",
    "Draft",
    "DraftStatus",
    "EditorialBrief",
    "Metafield",
    "ProductImage",
    "WorkflowFlow",
    "MATRIX_ACTIONS",
    "NAVIGATION_ACTIONS",
    "NON_CONTENT_ACTIONS",
    "Action",
    "AddDimension",
    "AddImage",
    "ApplyGeneratedContent",
    "GoBack",
    "GoNext",
    "GoToStep",
    "MarkPublished",
    "MarkValidated",
    "RemoveDimension",
    "Reset",
    "SaveDraft",
    "SelectArchetype",
    "SelectBrand",
    "SelectGender",
    "SelectMascot",
    "SelectMaterial",
    "SetCollections",
    "SetColorLine",
    "SetCustomDesign",
    "SetEditorialBrief",
    "SetMargin",
    "SetMetafields",
    "SetPricing",
    "SetProductType",
    "SetSelection",
    "SetSkuPolicy",
    "SetSkuSeed",
    "ToggleValue",
    "UpdateCopy",
]
