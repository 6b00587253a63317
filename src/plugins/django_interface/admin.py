"""
Admin site registry
-------------------
Registra os modelos de forma dinâmica.
"""

import structlog
from django.contrib import admin as django_admin

from . import models

logger = structlog.get_logger(__name__)

# ╭──────────────────────────────────────────────╮
# │ Configuração de cada ModelAdmin             │
# ╰──────────────────────────────────────────────╯
MODEL_ADMIN_REGISTRY: dict[type[models.models.Model], dict] = {
    # 1. Auth
    models.User: dict(
        list_display=("email", "nome", "perfil", "id_planilha", "ativo"),
        search_fields=("email", "nome"),
        list_filter=("perfil", "ativo"),
    ),
    # 2. Pool & distribuição
    models.Client: dict(
        list_display=("matricula", "nome", "telefone", "categoria", "ativo"),
        search_fields=("matricula", "nome"),
        list_filter=("categoria", "ativo"),
    ),
    models.DistributedClient: dict(
        list_display=("matricula", "nome", "categoria", "usuario", "status", "data_distribuicao"),
        search_fields=("matricula", "nome"),
        list_filter=("status", "categoria"),
        readonly_fields=("cliente_origem_id", "data_distribuicao"),
    ),
    models.DistributionLock: dict(list_display=("categoria", "updated_at")),
    # 3. Ligações & tickets
    models.Ligacao: dict(
        list_display=("matricula", "nome", "usuario", "status", "valor", "ticket_gerado", "created_at"),
        search_fields=("matricula", "nome"),
        list_filter=("status", "forma_pagamento", "ticket_gerado"),
    ),
    models.Ticket: dict(
        list_display=("matricula", "nome", "usuario", "valor", "categoria", "enviado", "pago", "created_at"),
        search_fields=("matricula", "nome"),
        list_filter=("categoria", "enviado", "pago"),
    ),
    # 4. Supervisão
    models.InstallmentFee: dict(
        list_display=("quantidade", "valor", "ativo"),
        list_filter=("ativo",),
    ),
    models.SupervisorConfig: dict(list_display=("mes_referente", "updated_at")),
}

# ╭──────────────────────────────────────────────╮
# │ Registro dinâmico                           │
# ╰──────────────────────────────────────────────╯
for model, opts in MODEL_ADMIN_REGISTRY.items():
    admin_class = type(f"{model.__name__}Admin", (django_admin.ModelAdmin,), opts)
    django_admin.site.register(model, admin_class)
    logger.debug("Registered model in admin", model=model.__name__)
