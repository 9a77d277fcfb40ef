# app.py
"""
Entrypoint da aplicação.

Uso:
  python app.py migrate --db controle_dlc.db
  python app.py produtos listar --tipo secundaria
  python app.py resumo
  python app.py verificacao confirmar --responsavel "Ana"
  python app.py verificacao exportar --destino exportacoes
"""

from controle_dlc.adapters.cli import main

if __name__ == "__main__":
    main()
