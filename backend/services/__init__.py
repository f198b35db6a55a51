# Services do ContrataFácil
#
# - extraction: normalização de texto compartilhada
# - spreadsheet_extraction: importação de contratos de planilhas .xlsx/.xlsm
