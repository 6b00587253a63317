from pydantic import BaseModel


class TicketNotificationDTO(BaseModel):
    """Parâmetros do webhook de tickets (automação do Trello)."""
    atendente: str
    matricula: str
    nome: str
    valor: str  # já formatado com duas casas, ex.: "1200.00"
    qtd: int
    telefone: str
    categoria: str
    subcategoria: str | None = None


class DistributionRequestDTO(BaseModel):
    """Parâmetros do webhook de distribuição delegada (planilha externa)."""
    usuario_id: str  # id_planilha do atendente
    categoria: str
    aba_destino: str
    quantidade: int
