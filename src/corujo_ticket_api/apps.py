from django.apps import AppConfig


class CorujoTicketConfig(AppConfig):
    name = "corujo_ticket_api"
    verbose_name = "CorujoTicket API"

    def ready(self):
        from django.conf import settings

        # ─── DI containers ──────────────────────────────────────────
        from corujo_core.adapters.config.composition_root import (
            setup_di_container_from_settings as build_core_container,
        )

        from client_distribution.adapters.config.composition_root import (
            setup_di_container_from_settings as build_cd_container,
        )

        build_core_container(settings)
        build_cd_container(settings)
