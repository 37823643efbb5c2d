"""Forms holding drafts for create/edit screens."""

from .accessory import AccessoryForm as AccessoryForm
from .base import (
    FormMode as FormMode,
    ResourceForm as ResourceForm,
)
from .cabinet_type import CabinetTypeForm as CabinetTypeForm
from .finish_rate import FinishRateForm as FinishRateForm
from .lighting_rule import LightingRuleForm as LightingRuleForm
from .line_item import LineItemForm as LineItemForm
from .pdf_customization import PdfCustomizationForm as PdfCustomizationForm
