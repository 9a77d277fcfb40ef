# controle_dlc/infra/logger.py
"""
Sistema de logging para as operações do controle de DLC.

Este módulo configura e fornece loggers para registrar as operações
críticas do sistema: cadastro de produtos, verificações diárias,
acesso ao armazenamento e eventos gerais.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional


# Flag global para habilitar/desabilitar logging (CONTROLE_DLC_LOG=1 liga)
ENABLE_LOGGING = os.getenv("CONTROLE_DLC_LOG", "0") == "1"

# Configuração base dos loggers
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def setup_logger(name: str, log_file: str, level: int = logging.INFO) -> logging.Logger:
    """
    Configura um logger específico com arquivo de saída.

    O arquivo só é aberto na primeira mensagem emitida.

    Args:
        name: Nome do logger
        log_file: Caminho do arquivo de log
        level: Nível de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        Logger configurado
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    while logger.handlers:
        logger.removeHandler(logger.handlers[0])

    file_handler = logging.FileHandler(log_file, encoding='utf-8', delay=True)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(file_handler)

    return logger

# Diretório base para logs (na pasta do pacote)
BASE_DIR = Path(__file__).parent.parent
LOGS_DIR = BASE_DIR / "logs"

transaction_logger = setup_logger(
    'controle_dlc.transactions',
    str(LOGS_DIR / 'transactions.log')
)

produtos_logger = setup_logger(
    'controle_dlc.produtos',
    str(LOGS_DIR / 'produtos.log')
)

verificacoes_logger = setup_logger(
    'controle_dlc.verificacoes',
    str(LOGS_DIR / 'verificacoes.log')
)

database_logger = setup_logger(
    'controle_dlc.database',
    str(LOGS_DIR / 'database.log')
)

system_logger = setup_logger(
    'controle_dlc.system',
    str(LOGS_DIR / 'system.log')
)

def log_transaction(operation: str, data: Dict[str, Any], result: Optional[Any] = None, error: Optional[str] = None) -> None:
    """
    Registra uma transação completa no log.

    Args:
        operation: Tipo de operação (salvar_produto, confirmar_verificacao, ...)
        data: Dados da transação
        result: Resultado da operação (opcional)
        error: Mensagem de erro (opcional)
    """
    if not ENABLE_LOGGING:
        return
    if error:
        transaction_logger.error(f"TRANSACTION_FAILED: {operation} - {error} - Data: {data}")
    else:
        transaction_logger.info(f"TRANSACTION_SUCCESS: {operation} - Result: {result} - Data: {data}")

def log_produto(action: str, produto_id: str, nome: Optional[str] = None, **kwargs) -> None:
    """
    Log específico para alterações no cadastro de produtos.

    Args:
        action: Ação realizada (insert, update, delete, renew)
        produto_id: Identificador do produto
        nome: Nome do produto (opcional)
        **kwargs: Dados adicionais
    """
    if not ENABLE_LOGGING:
        return
    log_data = {
        "action": action,
        "id": produto_id,
        "nome": nome,
        **kwargs
    }
    produtos_logger.info(f"PRODUTO_{action.upper()}: {log_data}")

def log_verificacao(action: str, **kwargs) -> None:
    """Log específico para o histórico de verificações diárias."""
    if not ENABLE_LOGGING:
        return
    verificacoes_logger.info(f"VERIFICACAO_{action.upper()}: {kwargs}")

def log_database_operation(table: str, operation: str, affected_rows: int = 0, **kwargs) -> None:
    """
    Log específico para operações no banco de dados.

    Args:
        table: Nome da tabela (ou chave do armazenamento)
        operation: Operação (READ, WRITE, DELETE, ...)
        affected_rows: Número de linhas/registros afetados
        **kwargs: Dados adicionais
    """
    if not ENABLE_LOGGING:
        return
    log_data = {
        "table": table,
        "operation": operation,
        "affected_rows": affected_rows,
        **kwargs
    }
    database_logger.info(f"DB_{operation}: {log_data}")

def log_system_event(event: str, details: Dict[str, Any] = None, level: str = "info") -> None:
    """
    Log para eventos do sistema.

    Args:
        event: Descrição do evento
        details: Detalhes adicionais (opcional)
        level: Nível do log (info, warning, error)
    """
    if not ENABLE_LOGGING:
        return
    log_data = {
        "event": event,
        "details": details or {}
    }
    log_method = getattr(system_logger, level.lower(), system_logger.info)
    log_method(f"SYSTEM_EVENT: {event} - {log_data}")

def log_file_operation(operation: str, file_path: str, rows_processed: int = 0, **kwargs) -> None:
    """
    Log para operações de arquivo (importação de planilha, exportação CSV).
    """
    if not ENABLE_LOGGING:
        return
    log_data = {
        "operation": operation,
        "file_path": file_path,
        "rows_processed": rows_processed,
        **kwargs
    }
    system_logger.info(f"FILE_{operation.upper()}: {log_data}")
