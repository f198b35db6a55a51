"""
Importa contratos de uma planilha Excel e imprime o resultado em JSON.

Uso:
    python scripts/importar_planilha.py contratos.xlsx
    python scripts/importar_planilha.py contratos.xlsx --aba "2024" --saida resultado.json
    python scripts/importar_planilha.py contratos.xlsx --mes-primeiro  # datas MM/DD
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Adicionar diretório pai ao path
sys.path.insert(0, str(Path(__file__).parent.parent))

from exceptions import ContrataFacilError
from logging_config import get_logger, setup_logging
from services.spreadsheet_extraction import import_workbook

logger = get_logger('scripts.importar_planilha')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Extrai contratos de uma planilha .xlsx/.xlsm'
    )
    parser.add_argument('arquivo', help='Caminho da planilha')
    parser.add_argument(
        '--aba',
        action='append',
        default=None,
        help='Importar apenas a aba informada (pode repetir)'
    )
    parser.add_argument(
        '--mes-primeiro',
        action='store_true',
        help='Interpretar datas ambíguas como MM/DD em vez de DD/MM'
    )
    parser.add_argument(
        '--saida',
        default=None,
        help='Arquivo JSON de saída (padrão: stdout)'
    )
    parser.add_argument(
        '--indent',
        type=int,
        default=2,
        help='Indentação do JSON (padrão: 2)'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    # stdout fica reservado para o JSON
    setup_logging(stream=sys.stderr)
    day_first = False if args.mes_primeiro else None

    try:
        result = import_workbook(args.arquivo, day_first=day_first)
    except ContrataFacilError as e:
        logger.error(f"{e.message}" + (f": {e.details}" if e.details else ""))
        return 1

    if args.aba:
        result.sheets = [s for s in result.sheets if s.sheet_name in args.aba]

    payload = result.model_dump_json(by_alias=True, indent=args.indent)
    if args.saida:
        Path(args.saida).write_text(payload, encoding='utf-8')
        logger.info(f"Resultado salvo em {args.saida}")
    else:
        print(payload)

    logger.info(
        f"Resumo: {result.total_contratos} contrato(s) em {len(result.sheets)} aba(s)"
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
