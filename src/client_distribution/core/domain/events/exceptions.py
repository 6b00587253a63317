class NotificationError(Exception):
    """Classe base para todas as exceções de notificação."""
    pass

class PermanentNotificationError(NotificationError):
    """
    Erro permanente que não deve ser retentado.
    Exemplos:
    - 4xx: parâmetros rejeitados pelo webhook.
    - URL do webhook não configurada.
    """
    pass

class TemporaryNotificationError(NotificationError):
    """
    Erro temporário que pode ser resolvido com uma nova tentativa.
    Exemplos:
    - 5xx: serviço de automação indisponível.
    - Falhas de rede, timeouts.
    """
    pass
