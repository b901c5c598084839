import asyncio
import json
import os
import re
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from loguru import logger
from watchdog.events import PatternMatchingEventHandler
from watchdog.observers import Observer


def generate_output_filename(source: str, origin: str = "file", extension: str = "json") -> str:
    """
    Nombre de salida con timestamp y origen.
    Ej: 20250821-170605-123456_file_patients_batch.json
    """
    if not isinstance(source, str):
        raise TypeError(f"Invalid type for source: expected str, got {type(source).__name__}")
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S-%f")  # Para orden natural
    base_name = os.path.splitext(os.path.basename(source))[0]
    safe_base = re.sub(r"[^a-zA-Z0-9_\-]", "_", base_name) or "message"
    return f"{ts}_{origin}_{safe_base}.{extension}"


def write_json(folder: str, filename: str, data: Any) -> Path:
    out = Path(folder)
    out.mkdir(parents=True, exist_ok=True)
    p = out / filename
    p.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return p


class FileWatcher:
    """Watchdog consumer: entrega la ruta de cada archivo del inbox al loop asyncio.

    created/modified/moved reinician un temporizador por archivo; solo cuando el
    archivo lleva ``debounce_sec`` sin eventos se agenda ``on_file_async(path)``.
    La lectura ocurre en la corrutina, nunca en el hilo del observer.
    """

    def __init__(
        self,
        inbox: str,
        glob: str,
        on_file_async,
        loop: asyncio.AbstractEventLoop,
        debounce_sec: float = 0.5,
    ):
        self.inbox = Path(inbox)
        self.inbox.mkdir(parents=True, exist_ok=True)
        self.loop = loop
        self.on_file_async = on_file_async
        self.debounce_sec = debounce_sec
        self._timers: Dict[str, threading.Timer] = {}
        self._lock = threading.Lock()

        self.handler = PatternMatchingEventHandler(patterns=[glob], ignore_directories=True)
        self.handler.on_created = lambda e: self._schedule(e.src_path)
        self.handler.on_modified = lambda e: self._schedule(e.src_path)
        self.handler.on_moved = lambda e: self._schedule(e.dest_path)

        self.observer = Observer()

    def _schedule(self, path: str):
        # Solo archivos directamente en el inbox (no archive/raw ni error/)
        if Path(path).parent.resolve() != self.inbox.resolve():
            return
        with self._lock:
            prev = self._timers.pop(path, None)
            if prev is not None:
                prev.cancel()
            timer = threading.Timer(self.debounce_sec, self._submit, args=(path,))
            timer.daemon = True
            self._timers[path] = timer
            timer.start()

    def _submit(self, path: str):
        with self._lock:
            self._timers.pop(path, None)
        # Ya procesado y movido
        if not Path(path).exists():
            return
        logger.debug(f"Archivo detectado: {path}")
        asyncio.run_coroutine_threadsafe(self.on_file_async(path), self.loop)

    def start(self):
        self.observer.schedule(self.handler, str(self.inbox), recursive=False)
        self.observer.start()

    def stop(self):
        self.observer.stop()
        self.observer.join()
        with self._lock:
            for timer in self._timers.values():
                timer.cancel()
            self._timers.clear()
