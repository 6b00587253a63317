from __future__ import annotations

import csv
from pathlib import Path
from typing import Any

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from client_distribution.adapters.config.composition_root import setup_di_container_from_settings
from client_distribution.core.application.commands.core_commands import ImportClientsCommand
from client_distribution.core.domain.exceptions import DistributionError

CSV_FIELDS = ("matricula", "nome", "telefone", "categoria")


class Command(BaseCommand):
    """
    Importa o pool de clientes a partir de um CSV separado por ';'.

    Colunas: matricula;nome;telefone;categoria (cabeçalho opcional).
    Só matrículas novas são criadas (ativas); as já cadastradas não são alteradas.
    """
    help = "Importa clientes novos para o pool a partir de um arquivo CSV."

    def add_arguments(self, parser) -> None:
        parser.add_argument("path", type=str, help="Caminho do CSV (matricula;nome;telefone;categoria).")
        parser.add_argument("--delimiter", type=str, default=";", help="Separador de colunas.")
        parser.add_argument("--encoding", type=str, default="utf-8-sig", help="Encoding do arquivo.")

    def _read_rows(self, path: Path, delimiter: str, encoding: str) -> list[dict]:
        with path.open(newline="", encoding=encoding) as fh:
            reader = csv.reader(fh, delimiter=delimiter)
            rows = [r for r in reader if any(cell.strip() for cell in r)]

        if rows and [c.strip().lower() for c in rows[0][: len(CSV_FIELDS)]] == list(CSV_FIELDS):
            rows = rows[1:]
        return [dict(zip(CSV_FIELDS, r, strict=False)) for r in rows]

    def handle(self, *args: Any, **opt: Any) -> None:
        path = Path(opt["path"])
        if not path.is_file():
            raise CommandError(f"Arquivo não encontrado: {path}")

        rows = self._read_rows(path, opt["delimiter"], opt["encoding"])
        if not rows:
            self.stdout.write(self.style.WARNING("Nenhuma linha encontrada no arquivo."))
            return

        container = setup_di_container_from_settings(settings)
        try:
            created, skipped = container.command_bus().dispatch(ImportClientsCommand(rows=tuple(rows)))
        except DistributionError as exc:
            raise CommandError(exc.message) from exc

        self.stdout.write(self.style.SUCCESS(
            f"✅ Importação concluída: {created} criado(s), {len(skipped)} ignorado(s)."
        ))
        if skipped:
            self.stdout.write(self.style.WARNING(
                f"Matrículas já cadastradas (não alteradas): {', '.join(skipped)}"
            ))
