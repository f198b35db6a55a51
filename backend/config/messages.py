"""
Mensagens padronizadas do ContrataFacil.
"""


class Messages:
    """Textos exibidos ao usuario durante a importacao de planilhas."""
    # Valores padrao dos contratos extraidos
    OBJETO_NAO_ESPECIFICADO = "Objeto não especificado na planilha"
    CONTRATANTE_NAO_ESPECIFICADO = "Órgão contratante não especificado na planilha"
    CONTRATADA_NAO_ESPECIFICADA = "Empresa não especificada"
    # Validacao do mapeamento de colunas
    CAMPO_OBRIGATORIO_AUSENTE = "Campo obrigatório não encontrado: {field}"
    CAMPO_RECOMENDADO_AUSENTE = "Campo recomendado não encontrado: {field}"
    COLUNA_MUITO_VAZIA = 'Coluna "{header}" tem muitos dados vazios ({empty}/{total})'
    FORMATO_DATA_INCERTO = 'Formato de data incerto na coluna "{header}" ({confidence:.0f}%)'
    DIA_MES_PRESUMIDO = (
        'Datas ambíguas na coluna "{header}": assumido {format} '
        "por preferência regional"
    )
    # Consistencia de datas
    NENHUMA_DATA = "Nenhuma data encontrada"
    INICIO_AUSENTE = "Data de início não encontrada"
    TERMINO_AUSENTE = "Data de término não encontrada"
    INICIO_APOS_TERMINO = "Data de início é posterior à data de término"
    # Observacoes (procedencia)
    OBS_ORIGEM = 'Extraído da planilha "{sheet}"{arquivo} - linha {row}.'
    OBS_ARQUIVO = ' do arquivo "{file}"'
    OBS_COLUNA_INICIO = ' Data início: coluna "{header}" (formato {format}, confiança {confidence:.2f}).'
    OBS_COLUNA_TERMINO = ' Data término: coluna "{header}" (formato {format}, confiança {confidence:.2f}).'
    OBS_ATENCAO = " ATENÇÃO: {warnings}."
    OBS_PRAZO_CALCULADO = " Prazo calculado automaticamente: {prazo} {unidade}."
    OBS_PRAZO_INFORMADO = " Prazo informado na planilha: {prazo} {unidade}."
    OBS_PREENCHER = " Preencher manualmente: {fields}."
    OBS_MAPEAMENTO_FLEXIVEL = (
        " Mapeamento flexível por posição: nenhum cabeçalho reconhecido, "
        "revisar todos os campos."
    )
    # Arquivos
    ARQUIVO_NAO_ENCONTRADO = "Arquivo não encontrado"
    PLANILHA_VAZIA = "Nenhum contrato pôde ser extraído da planilha"
