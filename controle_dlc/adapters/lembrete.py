"""
Lembrete periódico da verificação diária da DLC Secundária.

A checagem roda numa thread daemon: na partida e depois a cada
``intervalo`` segundos, chama ``ao_lembrar(agora)`` se a verificação de
hoje estiver pendente. ``parar()`` cancela o ciclo e aguarda a thread.
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Callable, Optional, Sequence

from controle_dlc.config import DEFAULTS
from controle_dlc.domain.models import RegistroVerificacao
from controle_dlc.domain.verificacao import lembrete_pendente
from controle_dlc.infra.logger import log_system_event


class LembreteVerificacao:
    def __init__(
        self,
        obter_registros: Callable[[], Sequence[RegistroVerificacao]],
        ao_lembrar: Callable[[datetime], None],
        intervalo: float = DEFAULTS.intervalo_lembrete_segundos,
        relogio: Callable[[], datetime] = datetime.now,
    ):
        self.obter_registros = obter_registros
        self.ao_lembrar = ao_lembrar
        self.intervalo = intervalo
        self.relogio = relogio
        self._parar = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def ativo(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def checar(self) -> bool:
        """Executa uma checagem; retorna True se o lembrete foi disparado."""
        agora = self.relogio()
        if lembrete_pendente(self.obter_registros(), agora):
            log_system_event("lembrete_verificacao", {"agora": agora.isoformat()}, level="warning")
            self.ao_lembrar(agora)
            return True
        return False

    def _ciclo(self) -> None:
        while not self._parar.is_set():
            self.checar()
            self._parar.wait(self.intervalo)

    def iniciar(self) -> None:
        if self.ativo:
            return
        self._parar.clear()
        self._thread = threading.Thread(target=self._ciclo, name="lembrete-verificacao", daemon=True)
        self._thread.start()

    def parar(self, timeout: Optional[float] = None) -> None:
        self._parar.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def __enter__(self) -> "LembreteVerificacao":
        self.iniciar()
        return self

    def __exit__(self, *exc) -> None:
        self.parar()
