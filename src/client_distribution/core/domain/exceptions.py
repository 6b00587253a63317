"""
Erros do domínio de distribuição/atendimento.

Todos carregam uma mensagem pronta para o usuário (pt-BR) e um `code`
estável, usado pela camada HTTP para montar a resposta.
"""
from __future__ import annotations


class DistributionError(Exception):
    """Classe base para todas as exceções do domínio."""
    code = "distribution_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidRequest(DistributionError):
    """Requisição incompleta ou inconsistente (campo obrigatório ausente etc.)."""
    code = "invalid_request"


class InvalidQuantity(InvalidRequest):
    code = "invalid_quantity"

    def __init__(self, quantidade: int, maximo: int) -> None:
        super().__init__(f"Quantidade inválida: {quantidade}. Informe um valor entre 1 e {maximo}.")
        self.quantidade = quantidade
        self.maximo = maximo


class InsufficientPool(DistributionError):
    """Menos clientes disponíveis do que o solicitado; nada foi distribuído."""
    code = "insufficient_pool"

    def __init__(self, categoria: str, solicitado: int, disponivel: int) -> None:
        super().__init__(
            f"Clientes insuficientes na categoria {categoria}: "
            f"solicitados {solicitado}, disponíveis {disponivel}."
        )
        self.categoria = categoria
        self.solicitado = solicitado
        self.disponivel = disponivel


class AlreadyResolved(DistributionError):
    code = "already_resolved"

    def __init__(self, distributed_client_id: str, status: str) -> None:
        super().__init__(f"Cliente distribuído {distributed_client_id} já foi resolvido ({status}).")
        self.distributed_client_id = distributed_client_id
        self.status = status


class UnknownEntity(DistributionError):
    code = "unknown_entity"

    def __init__(self, entity: str, identifier: object) -> None:
        super().__init__(f"{entity} não encontrado(a): {identifier}")
        self.entity = entity
        self.identifier = identifier


class UnknownAgent(UnknownEntity):
    def __init__(self, agent_id: object) -> None:
        super().__init__("Atendente", agent_id)


class UpstreamUnavailable(DistributionError):
    """Falha de rede/timeout no banco ou no serviço externo; seguro para repetir."""
    code = "upstream_unavailable"
