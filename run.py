import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from patient_parser.api.http import create_app
from patient_parser.commons.config import load_cfg
from patient_parser.commons.logger import setup_logging
from patient_parser.services.inbox_service import InboxService
from patient_parser.services.records_service import RecordsService

app = typer.Typer(add_completion=False, help="Patient Message Parser")

SETTINGS_OPT = typer.Option(None, "--settings", "-s", help="ruta a settings.yaml")


@app.command()
def parse(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="archivo con uno o varios mensajes"),
    settings: Optional[str] = SETTINGS_OPT,
):
    """Parsea un archivo (mensajes separados por línea en blanco) e imprime cada registro."""
    cfg = load_cfg(settings)
    logger = setup_logging(None, cfg.app.log_level)
    svc = RecordsService()
    items = svc.process_batch(file.read_text(encoding="utf-8"))
    for it in items:
        if it.ok:
            typer.echo(f"Message {it.index}:\n{json.dumps(it.record.to_dict(), indent=2)}")
        else:
            logger.error(f"An error occurred in message {it.index}: {it.error}")
    if items and not any(it.ok for it in items):
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="IP local para escuchar"),
    port: Optional[int] = typer.Option(None, help="Puerto HTTP"),
    settings: Optional[str] = SETTINGS_OPT,
):
    """Levanta el endpoint HTTP POST <prefix>/parse-message."""
    cfg = load_cfg(settings)
    logger = setup_logging(cfg.paths.logs_root, cfg.app.log_level)
    bind_host = host or cfg.http.host
    bind_port = port or cfg.http.port
    logger.info(f"Servidor escuchando en {bind_host}:{bind_port}")
    uvicorn.run(create_app(RecordsService(), prefix=cfg.http.route_prefix), host=bind_host, port=bind_port)


@app.command()
def watch(settings: Optional[str] = SETTINGS_OPT):
    """Procesa el backlog del inbox y (si inbox.watch) sigue escuchando la carpeta."""
    cfg = load_cfg(settings)
    logger = setup_logging(cfg.paths.logs_root, cfg.app.log_level)
    logger.info("Iniciando lectura de mensajes pendientes por procesar")
    svc = InboxService(RecordsService(), cfg.paths, cfg.inbox.debounce_sec)
    glob_pat = cfg.inbox.filename_glob
    if cfg.inbox.watch:
        asyncio.run(svc.run_watch_mode(glob_pat))
    else:
        n = asyncio.run(svc.process_backlog(glob_pat))
        logger.info(f"Procesados {n} archivo(s)")


if __name__ == "__main__":
    app()
