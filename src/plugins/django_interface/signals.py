from corujo_core.adapters.utils.phone_utils import normalize_phone
from django.db.models.signals import pre_save
from django.dispatch import receiver

from .models import Client


@receiver(pre_save, sender=Client)
def normalize_client_phone_before_save(sender, instance: Client, **kwargs):
    norm = normalize_phone(instance.telefone, default_region="BR", with_plus=False)
    if not norm:
        raise ValueError(f"Telefone inválido: {instance.telefone!r}")
    instance.telefone = norm
