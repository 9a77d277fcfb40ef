# controle_dlc/config.py
"""
Configurações globais e valores padrão do controle de DLC.
"""

import os
from dataclasses import dataclass


# Caminho padrão do banco de dados SQLite (armazenamento chave/valor)
DB_PATH = os.path.join(os.getcwd(), "controle_dlc.db")


@dataclass
class DefaultConfig:
    """Valores padrão para parâmetros do sistema."""
    data_validade_padrao: str = "2025-12-01T00:00"  # validade dos itens do catálogo padrão
    hora_lembrete: int = 12  # a partir desta hora a verificação diária fica pendente
    intervalo_lembrete_segundos: float = 3600.0  # checagem periódica (1 hora)
    chave_produtos: str = "products"
    chave_verificacoes: str = "verificationLogs"


# Instância global dos valores padrão
DEFAULTS = DefaultConfig()
