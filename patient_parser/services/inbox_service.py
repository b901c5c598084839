# patient_parser/services/inbox_service.py
import asyncio
import shutil
from pathlib import Path
from typing import Optional

from loguru import logger

from patient_parser.commons.types import PathsCfg
from patient_parser.helpers.file_transport import FileWatcher, generate_output_filename, write_json
from patient_parser.services.records_service import RecordsService


class InboxService:
    """Procesa archivos de mensajes (uno o varios separados por línea en blanco)."""

    def __init__(self, records: RecordsService, paths: PathsCfg, debounce_sec: float = 0.5):
        self.records = records
        self.paths = paths
        self.debounce_sec = debounce_sec
        Path(paths.archive).mkdir(parents=True, exist_ok=True)
        Path(paths.error).mkdir(parents=True, exist_ok=True)

    def _to_error(self, hl7_text: str, src: Optional[str]) -> Path:
        err_name = Path(src).name if src else "message.err.txt"
        errp = Path(self.paths.error) / err_name
        errp.write_text(hl7_text, encoding="utf-8")
        return errp

    def _quarantine(self, src: Path) -> Optional[Path]:
        """Mueve el archivo tal cual (bytes crudos) a error/."""
        errp = Path(self.paths.error) / src.name
        try:
            shutil.move(str(src), errp)
        except OSError:
            logger.exception(f"No se pudo mover {src} a {errp}")
            return None
        return errp

    async def _process_text(self, text: str, src: Optional[str] = None) -> Optional[Path]:
        if not text.strip():
            # Puede estar aún escribiéndose: el siguiente evento lo reintenta
            logger.warning(f"Archivo vacío, se omite por ahora: {src}")
            return None
        try:
            items = self.records.process_batch(text)
            out_json = write_json(
                self.paths.archive,
                generate_output_filename(src or "message"),
                [it.to_dict() for it in items],
            )
            failed = [it for it in items if not it.ok]
            logger.info(f"{src}: {len(items) - len(failed)} ok, {len(failed)} con error -> {out_json}")

            if failed and len(failed) == len(items):
                # Todo el archivo está mal: copia a error/ para revisión
                errp = self._to_error(text, src)
                logger.error(f"Ningún mensaje válido en {src}; copiado a {errp}")

            # mueve el original procesado a archive/raw/
            if src and Path(src).exists():
                dst_dir = Path(self.paths.archive) / "raw"
                dst_dir.mkdir(parents=True, exist_ok=True)
                shutil.move(src, dst_dir / Path(src).name)
            return out_json
        except Exception as ex:
            # Errores inesperados también van a error/ y NO tumban el servicio
            errp = self._to_error(text, src)
            logger.exception(f"Error procesando {src}: {ex}. Copiado a {errp}")
            return None

    async def process_file(self, path: str) -> Optional[Path]:
        """Lee y procesa un archivo; cualquier fallo lo manda a error/ sin propagar."""
        src = Path(path)
        if not src.exists():
            return None
        try:
            try:
                raw = src.read_bytes()
            except OSError as e:
                logger.warning(f"No se pudo leer {src}: {e}; reintento breve...")
                await asyncio.sleep(0.1)
                raw = src.read_bytes()
            text = raw.decode("utf-8")
        except Exception as ex:
            errp = self._quarantine(src)
            logger.exception(f"Archivo ilegible {src}: {ex}. Movido a {errp}")
            return None
        return await self._process_text(text, str(src))

    async def process_backlog(self, glob_pat: str) -> int:
        inbox = Path(self.paths.inbox)
        files = sorted(inbox.glob(glob_pat))
        if not files:
            return 0
        logger.info(f"Backlog detectado: {len(files)} archivo(s) en {inbox}")
        for f in files:
            # Asegura que un fallo no detenga el backlog completo
            try:
                await self.process_file(str(f))
            except Exception as ex:
                logger.exception(f"Fallo inesperado con {f}: {ex}")
        return len(files)

    async def run_watch_mode(self, glob_pat: str, stop_event: Optional[asyncio.Event] = None):
        loop = asyncio.get_running_loop()

        await self.process_backlog(glob_pat)

        watcher = FileWatcher(self.paths.inbox, glob_pat, self.process_file, loop, self.debounce_sec)
        watcher.start()
        logger.info(f"Escuchando carpeta {self.paths.inbox} ({glob_pat})...")
        try:
            await (stop_event or asyncio.Event()).wait()
        finally:
            watcher.stop()
