from decimal import Decimal

from pydantic import BaseModel, Field


class InstallmentFeeDTO(BaseModel):
    quantidade: int = Field(ge=1)
    valor: Decimal = Field(gt=0, decimal_places=2)


class UpdateInstallmentFeeDTO(BaseModel):
    valor: Decimal = Field(gt=0, decimal_places=2)
