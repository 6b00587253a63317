# =========================================================
# Serializers compatíveis com as *entities* (e não com os
# modelos Django). Campos `*_formatado` são só para exibição.
# =========================================================
from client_distribution.core.application.services.formatter_service import FormatterService
from rest_framework import serializers

_fmt = FormatterService()


class PhoneDisplayMixin(serializers.Serializer):
    telefone_formatado = serializers.SerializerMethodField()

    def get_telefone_formatado(self, obj) -> str:
        return _fmt.format_phone(getattr(obj, "telefone", None))


# ───────────────────────────────────────────────
# Usuários
# ───────────────────────────────────────────────
class UserSerializer(serializers.Serializer):
    id          = serializers.UUIDField()
    email       = serializers.EmailField()
    nome        = serializers.CharField()
    perfil      = serializers.CharField()
    id_planilha = serializers.CharField(allow_blank=True, allow_null=True)
    ativo       = serializers.BooleanField()
    created_at  = serializers.DateTimeField(allow_null=True)
    updated_at  = serializers.DateTimeField(allow_null=True)


# ───────────────────────────────────────────────
# Pool de clientes  &  Distribuídos
# ───────────────────────────────────────────────
class ClientSerializer(PhoneDisplayMixin):
    id         = serializers.UUIDField()
    matricula  = serializers.CharField()
    nome       = serializers.CharField()
    telefone   = serializers.CharField()
    categoria  = serializers.CharField()
    ativo      = serializers.BooleanField()
    created_at = serializers.DateTimeField(allow_null=True)


class DistributedClientSerializer(PhoneDisplayMixin):
    id                = serializers.UUIDField()
    usuario_id        = serializers.UUIDField(allow_null=True)
    matricula         = serializers.CharField()
    nome              = serializers.CharField()
    telefone          = serializers.CharField()
    categoria         = serializers.CharField()
    status            = serializers.CharField()
    data_distribuicao = serializers.DateTimeField(allow_null=True)
    data_atendimento  = serializers.DateTimeField(allow_null=True)


class AllocationResultSerializer(serializers.Serializer):
    policy      = serializers.CharField()
    categoria   = serializers.CharField()
    quantidade  = serializers.IntegerField()
    aba_destino = serializers.CharField(allow_null=True)
    distributed = DistributedClientSerializer(many=True)


# ───────────────────────────────────────────────
# Ligações  &  Tickets
# ───────────────────────────────────────────────
class LigacaoSerializer(PhoneDisplayMixin):
    id               = serializers.UUIDField()
    usuario_id       = serializers.UUIDField()
    cliente_id       = serializers.UUIDField(allow_null=True)
    matricula        = serializers.CharField()
    nome             = serializers.CharField()
    telefone         = serializers.CharField()
    status           = serializers.CharField()
    qtd_mensalidades = serializers.IntegerField(allow_null=True)
    valor            = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    valor_formatado  = serializers.SerializerMethodField()
    forma_pagamento  = serializers.CharField(allow_null=True)
    retorno          = serializers.CharField(allow_null=True)
    data_retorno     = serializers.DateField(allow_null=True)
    observacoes      = serializers.CharField(allow_blank=True, allow_null=True)
    ticket_gerado    = serializers.BooleanField()
    ticket_id        = serializers.UUIDField(allow_null=True)
    created_at       = serializers.DateTimeField(allow_null=True)

    def get_valor_formatado(self, obj) -> str:
        return _fmt.format_currency(obj.valor)


class TicketSerializer(PhoneDisplayMixin):
    id               = serializers.UUIDField()
    usuario_id       = serializers.UUIDField()
    ligacao_id       = serializers.UUIDField(allow_null=True)
    matricula        = serializers.CharField()
    nome             = serializers.CharField()
    valor            = serializers.DecimalField(max_digits=12, decimal_places=2)
    valor_formatado  = serializers.SerializerMethodField()
    qtd_mensalidades = serializers.IntegerField()
    telefone         = serializers.CharField()
    categoria        = serializers.CharField()
    subcategoria     = serializers.CharField(allow_null=True)
    observacoes      = serializers.CharField(allow_blank=True, allow_null=True)
    enviado          = serializers.BooleanField()
    pago             = serializers.BooleanField()
    data_envio       = serializers.DateTimeField(allow_null=True)
    data_pagamento   = serializers.DateTimeField(allow_null=True)
    created_at       = serializers.DateTimeField(allow_null=True)

    def get_valor_formatado(self, obj) -> str:
        return _fmt.format_currency(obj.valor)


class TicketDispatchSerializer(serializers.Serializer):
    ticket   = TicketSerializer()
    notified = serializers.BooleanField()
    warning  = serializers.CharField(allow_null=True)


# ───────────────────────────────────────────────
# Valores de mensalidade  &  Configuração
# ───────────────────────────────────────────────
class InstallmentFeeSerializer(serializers.Serializer):
    id              = serializers.UUIDField()
    quantidade      = serializers.IntegerField()
    valor           = serializers.DecimalField(max_digits=12, decimal_places=2)
    valor_formatado = serializers.SerializerMethodField()
    ativo           = serializers.BooleanField()
    created_at      = serializers.DateTimeField(allow_null=True)

    def get_valor_formatado(self, obj) -> str:
        return _fmt.format_currency(obj.valor)


class SupervisorConfigSerializer(serializers.Serializer):
    id            = serializers.UUIDField()
    mes_referente = serializers.CharField(allow_blank=True)
    updated_at    = serializers.DateTimeField(allow_null=True)
