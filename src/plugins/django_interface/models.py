"""
Domínio → ORM.

⚑ `clientes_distribuidos` guarda um *snapshot* do cliente (sem FK)
⚑ Unicidade parcial garante que um cliente do pool só é consumido uma vez
⚑ `distribuicao_locks` serializa distribuições da mesma categoria
"""

from __future__ import annotations

import uuid

from django.db import models
from django.db.models import Index, Q, UniqueConstraint
from django.db.models.functions import Lower


class Categoria(models.TextChoices):
    NR = "NR", "NR"
    C1 = "1", "1"
    C2 = "2", "2"
    C3 = "3", "3"
    C4 = "4", "4"
    C5 = "5", "5"
    C6 = "6", "6"


# ╭──────────────────────────────────────────────╮
# │ 1. Autenticação / Acesso                    │
# ╰──────────────────────────────────────────────╯
class User(models.Model):
    class Perfil(models.TextChoices):
        LIGACAO = "ligacao", "Ligação"
        WHATSAPP = "whatsapp", "WhatsApp"
        SUPERVISAO = "supervisao", "Supervisão"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=128)
    password_hash = models.CharField(max_length=128)
    nome = models.CharField(max_length=100)
    perfil = models.CharField(
        max_length=20,
        choices=Perfil.choices,
        default=Perfil.LIGACAO,
        db_index=True,
    )
    id_planilha = models.CharField(max_length=255, blank=True, null=True)
    ativo = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "usuarios"
        indexes = [
            Index(Lower("email"), name="usuario_email_lower_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.nome} <{self.email}>"


# ╭──────────────────────────────────────────────╮
# │ 2. Pool de Clientes                         │
# ╰──────────────────────────────────────────────╯
class Client(models.Model):
    """Cadastro mestre de clientes. Só o flag `ativo` muda após a criação."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    matricula = models.CharField(max_length=50, unique=True)
    nome = models.CharField(max_length=255)
    telefone = models.CharField(max_length=20)
    categoria = models.CharField(max_length=2, choices=Categoria.choices, db_index=True)
    ativo = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "clientes"
        indexes = [
            Index(fields=["categoria", "ativo"], name="cliente_categoria_ativo_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.matricula} – {self.nome} [{self.categoria}]"


class DistributionLock(models.Model):
    """Uma linha por categoria; `SELECT … FOR UPDATE` nela serializa a distribuição."""
    categoria = models.CharField(max_length=2, choices=Categoria.choices, primary_key=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "distribuicao_locks"


class DistributedClient(models.Model):
    class Status(models.TextChoices):
        PENDENTE = "pendente", "Pendente"
        ATENDIDO = "atendido", "Atendido"
        NAO_ATENDIDO = "nao_atendido", "Não atendido"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    usuario = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="distribuidos"
    )

    # snapshot do cliente no momento da distribuição
    matricula = models.CharField(max_length=50)
    nome = models.CharField(max_length=255)
    telefone = models.CharField(max_length=20)
    categoria = models.CharField(max_length=2, choices=Categoria.choices)
    cliente_origem_id = models.UUIDField(null=True, blank=True, editable=False)

    status = models.CharField(
        max_length=12, choices=Status.choices, default=Status.PENDENTE, db_index=True
    )
    data_distribuicao = models.DateTimeField(auto_now_add=True)
    data_atendimento = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "clientes_distribuidos"
        constraints = [
            UniqueConstraint(
                fields=["cliente_origem_id"],
                condition=Q(cliente_origem_id__isnull=False),
                name="uq_distribuido_cliente_origem",
            ),
        ]
        indexes = [
            Index(fields=["usuario", "status"], name="distribuido_usuario_status_idx"),
            Index(fields=["categoria", "status"], name="distribuido_cat_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.matricula} ({self.status})"


# ╭──────────────────────────────────────────────╮
# │ 3. Ligações & Tickets                       │
# ╰──────────────────────────────────────────────╯
class Ligacao(models.Model):
    class Status(models.TextChoices):
        ATENDEU = "atendeu", "Atendeu"
        NAO_ATENDEU = "nao_atendeu", "Não atendeu"

    class FormaPagamento(models.TextChoices):
        PIX = "pix", "Pix"
        LINK = "link", "Link"
        UNIDADE = "unidade", "Unidade"

    class Retorno(models.TextChoices):
        R1 = "1x", "1x"
        R2 = "2x", "2x"
        R3 = "3x", "3x"
        R4 = "4+", "4+"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    usuario = models.ForeignKey(User, on_delete=models.PROTECT, related_name="ligacoes")
    cliente = models.ForeignKey(
        DistributedClient, on_delete=models.SET_NULL, null=True, blank=True, related_name="ligacoes"
    )
    matricula = models.CharField(max_length=50, db_index=True)
    nome = models.CharField(max_length=255)
    telefone = models.CharField(max_length=20)
    status = models.CharField(max_length=12, choices=Status.choices, db_index=True)
    qtd_mensalidades = models.PositiveIntegerField(null=True, blank=True)
    valor = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    forma_pagamento = models.CharField(max_length=10, choices=FormaPagamento.choices, null=True, blank=True)
    retorno = models.CharField(max_length=3, choices=Retorno.choices, null=True, blank=True)
    data_retorno = models.DateField(null=True, blank=True)
    observacoes = models.TextField(null=True, blank=True)
    ticket_gerado = models.BooleanField(default=False)
    ticket = models.ForeignKey(
        "Ticket", on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "ligacoes"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.matricula} – {self.status}"


class Ticket(models.Model):
    class Categoria(models.TextChoices):
        LINK = "Link", "Link"
        PIX = "Pix", "Pix"
        OUTROS = "Outros assuntos", "Outros assuntos"

    class Subcategoria(models.TextChoices):
        ENDERECO = "endereco", "Endereço"
        COMPROVANTES = "comprovantes", "Comprovantes"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    usuario = models.ForeignKey(User, on_delete=models.PROTECT, related_name="tickets")
    ligacao = models.ForeignKey(
        Ligacao, on_delete=models.SET_NULL, null=True, blank=True, related_name="tickets"
    )
    matricula = models.CharField(max_length=50, db_index=True)
    nome = models.CharField(max_length=255)
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    qtd_mensalidades = models.PositiveIntegerField()
    telefone = models.CharField(max_length=20)
    categoria = models.CharField(max_length=20, choices=Categoria.choices)
    subcategoria = models.CharField(max_length=20, choices=Subcategoria.choices, null=True, blank=True)
    observacoes = models.TextField(null=True, blank=True)
    enviado = models.BooleanField(default=False, db_index=True)
    pago = models.BooleanField(default=False, db_index=True)
    data_envio = models.DateTimeField(null=True, blank=True)
    data_pagamento = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "tickets"
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Ticket {self.matricula} – R$ {self.valor}"


# ╭──────────────────────────────────────────────╮
# │ 4. Configurações da Supervisão              │
# ╰──────────────────────────────────────────────╯
class InstallmentFee(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    quantidade = models.PositiveIntegerField()
    valor = models.DecimalField(max_digits=12, decimal_places=2)
    ativo = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "valores_mensalidades"
        ordering = ["quantidade"]
        constraints = [
            UniqueConstraint(
                fields=["quantidade"],
                condition=Q(ativo=True),
                name="uq_valor_mensalidade_quantidade_ativa",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.quantidade}x → R$ {self.valor}"


class SupervisorConfig(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    mes_referente = models.CharField(max_length=50, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "configuracoes_supervisor"

    def __str__(self) -> str:
        return f"Mês referente: {self.mes_referente or '—'}"
