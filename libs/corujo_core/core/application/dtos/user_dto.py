from typing import Literal

from pydantic import BaseModel, EmailStr, Field


class CreateUserDTO(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    nome: str = Field(min_length=1)
    perfil: Literal["ligacao", "whatsapp", "supervisao"]
    id_planilha: str | None = None


class UpdateUserDTO(BaseModel):
    nome: str | None = None
    perfil: Literal["ligacao", "whatsapp", "supervisao"] | None = None
    id_planilha: str | None = None
    ativo: bool | None = None
    password: str | None = Field(default=None, min_length=6)
