"""
Configurações da importação de contratos a partir de planilhas.

Usa dataclasses para documentação dos limiares, divididos por etapa
(detecção de formato de data, análise de colunas, validação). Os
limiares das heurísticas podem ser ajustados por variáveis de ambiente.
"""
from dataclasses import dataclass
from typing import ClassVar

from .base import env_bool, env_float, env_int


@dataclass(frozen=True)
class DateDetectionConfig:
    """
    Configurações da detecção do formato de data de uma coluna.

    Attributes:
        SAMPLE_SIZE: Quantidade de valores não vazios amostrados por coluna.
        SERIAL_MIN: Menor número aceito como serial do Excel.
        SERIAL_MAX: Limite superior (exclusivo) dos seriais do Excel.
        SERIAL_RATIO: Proporção mínima de seriais para a coluna ser serial.
        ISO_RATIO: Proporção mínima de textos AAAA-MM-DD.
        MONTH_YEAR_RATIO: Proporção mínima de textos MM/AAAA.
        TWO_DIGIT_YEAR_RATIO: Proporção mínima de datas com ano de dois dígitos.
        DAY_FIRST_WEIGHT: Peso do voto dia/mês quando o token é ambíguo.
            Abaixo de 0.5 inverteria a preferência regional.
        DAY_FIRST: Preferência regional (True = DD/MM).
        CONF_*: Confiança atribuída a cada formato reconhecido.
    """
    SAMPLE_SIZE: ClassVar[int] = env_int("IMPORT_DATE_SAMPLE_SIZE", 10)
    SERIAL_MIN: ClassVar[float] = env_float("IMPORT_SERIAL_MIN", 1.0)
    SERIAL_MAX: ClassVar[float] = env_float("IMPORT_SERIAL_MAX", 100000.0)
    SERIAL_RATIO: ClassVar[float] = env_float("IMPORT_SERIAL_RATIO", 0.5)
    ISO_RATIO: ClassVar[float] = env_float("IMPORT_ISO_RATIO", 0.5)
    MONTH_YEAR_RATIO: ClassVar[float] = env_float("IMPORT_MONTH_YEAR_RATIO", 0.5)
    TWO_DIGIT_YEAR_RATIO: ClassVar[float] = env_float("IMPORT_TWO_DIGIT_YEAR_RATIO", 0.7)
    DAY_FIRST_WEIGHT: ClassVar[float] = env_float("IMPORT_DAY_FIRST_WEIGHT", 0.7)
    DAY_FIRST: ClassVar[bool] = env_bool("IMPORT_DAY_FIRST", True)

    CONF_SERIAL: ClassVar[float] = 0.9
    CONF_ISO: ClassVar[float] = 0.95
    CONF_MONTH_YEAR: ClassVar[float] = 0.9
    CONF_TWO_DIGIT_YEAR: ClassVar[float] = 0.85
    CONF_FOUR_DIGIT_YEAR: ClassVar[float] = 0.8


@dataclass(frozen=True)
class DateParsingConfig:
    """
    Configurações da conversão de células em datas.

    Attributes:
        STRATEGY_TRUST_THRESHOLD: Confiança a partir da qual o formato da
            coluna decide a ordem dia/mês.
        YEAR_MIN: Menor ano aceito.
        YEAR_MAX: Maior ano aceito.
        TWO_DIGIT_YEAR_WINDOW: Anos à frente do ano de referência que um
            ano de dois dígitos ainda pode alcançar.
    """
    STRATEGY_TRUST_THRESHOLD: ClassVar[float] = env_float("IMPORT_STRATEGY_TRUST", 0.8)
    YEAR_MIN: ClassVar[int] = env_int("IMPORT_YEAR_MIN", 1900)
    YEAR_MAX: ClassVar[int] = env_int("IMPORT_YEAR_MAX", 2100)
    TWO_DIGIT_YEAR_WINDOW: ClassVar[int] = env_int("IMPORT_TWO_DIGIT_YEAR_WINDOW", 20)


@dataclass(frozen=True)
class ColumnAnalysisConfig:
    """
    Configurações da análise de colunas e pontuação de cabeçalhos.

    Attributes:
        DATE_TYPE_RATIO: Proporção de datas para classificar a coluna como data.
        NUMBER_TYPE_RATIO: Proporção de números para classificar como número.
        TEXT_TYPE_RATIO: Proporção de textos para classificar como texto.
        SAMPLES_PER_COLUMN: Valores de exemplo guardados por coluna.
        HEADER_EXACT: Pontuação do cabeçalho igual a um sinônimo.
        HEADER_CONTAINS: Pontuação do cabeçalho que contém um sinônimo.
        HEADER_ABBREVIATION: Pontuação de abreviação de um sinônimo.
        HEADER_DATE_PARTIAL: Pontuação de cabeçalho de data genérico.
        TIER2_WEIGHT: Fator aplicado aos sinônimos secundários.
        DATE_BOOST: Bônus para campos de data com conteúdo de data.
        DATE_BOOST_CAP: Teto da confiança após o bônus.
        DATE_BOOST_MIN_CONFIDENCE: Confiança do conteúdo exigida para o bônus.
        MIN_ABBREVIATION_LENGTH: Tamanho mínimo de uma abreviação.
    """
    DATE_TYPE_RATIO: ClassVar[float] = env_float("IMPORT_DATE_TYPE_RATIO", 0.7)
    NUMBER_TYPE_RATIO: ClassVar[float] = env_float("IMPORT_NUMBER_TYPE_RATIO", 0.8)
    TEXT_TYPE_RATIO: ClassVar[float] = env_float("IMPORT_TEXT_TYPE_RATIO", 0.6)
    SAMPLES_PER_COLUMN: ClassVar[int] = 5

    HEADER_EXACT: ClassVar[float] = 0.98
    HEADER_CONTAINS: ClassVar[float] = 0.88
    HEADER_ABBREVIATION: ClassVar[float] = 0.78
    HEADER_DATE_PARTIAL: ClassVar[float] = 0.65
    TIER2_WEIGHT: ClassVar[float] = env_float("IMPORT_TIER2_WEIGHT", 0.9)
    DATE_BOOST: ClassVar[float] = env_float("IMPORT_DATE_BOOST", 0.1)
    DATE_BOOST_CAP: ClassVar[float] = 0.98
    DATE_BOOST_MIN_CONFIDENCE: ClassVar[float] = 0.7
    MIN_ABBREVIATION_LENGTH: ClassVar[int] = 3


@dataclass(frozen=True)
class DateColumnConfig:
    """
    Configurações da seleção das colunas de início e de término.

    Attributes:
        HEADER_EXACT: Pontuação do cabeçalho igual a um sinônimo.
        HEADER_CONTAINS: Pontuação do cabeçalho que contém um sinônimo.
        HEADER_ABBREVIATION: Pontuação de abreviação de um sinônimo.
        HEADER_WEIGHT: Peso do cabeçalho na confiança da coluna.
        CONTENT_WEIGHT: Peso do formato do conteúdo. Deveria somar 1
            com HEADER_WEIGHT.
    """
    HEADER_EXACT: ClassVar[float] = 0.95
    HEADER_CONTAINS: ClassVar[float] = 0.85
    HEADER_ABBREVIATION: ClassVar[float] = 0.75
    HEADER_WEIGHT: ClassVar[float] = env_float("IMPORT_DATE_HEADER_WEIGHT", 0.6)
    CONTENT_WEIGHT: ClassVar[float] = env_float("IMPORT_DATE_CONTENT_WEIGHT", 0.4)


@dataclass(frozen=True)
class MappingValidationConfig:
    """
    Configurações da validação do mapeamento de colunas.

    Attributes:
        REQUIRED_MIN_CONFIDENCE: Confiança mínima de um campo obrigatório.
        EMPTY_RATIO_WARNING: Proporção de células vazias que gera aviso.
        DATE_CONFIDENCE_WARNING: Confiança de formato de data que gera aviso.
    """
    REQUIRED_MIN_CONFIDENCE: ClassVar[float] = env_float("IMPORT_REQUIRED_MIN_CONFIDENCE", 0.7)
    EMPTY_RATIO_WARNING: ClassVar[float] = env_float("IMPORT_EMPTY_RATIO_WARNING", 0.8)
    DATE_CONFIDENCE_WARNING: ClassVar[float] = env_float("IMPORT_DATE_CONFIDENCE_WARNING", 0.7)


@dataclass(frozen=True)
class PeriodConfig:
    """
    Configurações de prazo e vigência.

    Attributes:
        MAX_DAYS: Até quantos dias o prazo é expresso em dias.
        MAX_MONTHS_DAYS: Até quantos dias o prazo é expresso em meses.
        EXPIRING_SOON_DAYS: Antecedência para a situação "vencendo".
        FLEXIBLE_MIN_CELLS: Células preenchidas para o fallback posicional
            aproveitar a linha.
    """
    MAX_DAYS: ClassVar[int] = env_int("IMPORT_PERIOD_MAX_DAYS", 90)
    MAX_MONTHS_DAYS: ClassVar[int] = env_int("IMPORT_PERIOD_MAX_MONTHS_DAYS", 730)
    EXPIRING_SOON_DAYS: ClassVar[int] = env_int("IMPORT_EXPIRING_SOON_DAYS", 30)
    FLEXIBLE_MIN_CELLS: ClassVar[int] = 2


class ImportacaoConfig:
    """
    Configurações centralizadas da importação de planilhas.

    Acesso via sub-classes organizadas:
        ImportacaoConfig.date_detection.SAMPLE_SIZE
        ImportacaoConfig.period.MAX_DAYS

    Ou acesso direto, usado pelos serviços:
        ImportacaoConfig.DATE_SAMPLE_SIZE
    """
    date_detection = DateDetectionConfig
    date_parsing = DateParsingConfig
    column_analysis = ColumnAnalysisConfig
    date_column = DateColumnConfig
    mapping_validation = MappingValidationConfig
    period = PeriodConfig

    # Detecção de formato de data
    DATE_SAMPLE_SIZE = DateDetectionConfig.SAMPLE_SIZE
    SERIAL_MIN = DateDetectionConfig.SERIAL_MIN
    SERIAL_MAX = DateDetectionConfig.SERIAL_MAX
    SERIAL_RATIO = DateDetectionConfig.SERIAL_RATIO
    ISO_RATIO = DateDetectionConfig.ISO_RATIO
    MONTH_YEAR_RATIO = DateDetectionConfig.MONTH_YEAR_RATIO
    TWO_DIGIT_YEAR_RATIO = DateDetectionConfig.TWO_DIGIT_YEAR_RATIO
    DAY_FIRST_WEIGHT = DateDetectionConfig.DAY_FIRST_WEIGHT
    DAY_FIRST = DateDetectionConfig.DAY_FIRST
    CONF_SERIAL = DateDetectionConfig.CONF_SERIAL
    CONF_ISO = DateDetectionConfig.CONF_ISO
    CONF_MONTH_YEAR = DateDetectionConfig.CONF_MONTH_YEAR
    CONF_TWO_DIGIT_YEAR = DateDetectionConfig.CONF_TWO_DIGIT_YEAR
    CONF_FOUR_DIGIT_YEAR = DateDetectionConfig.CONF_FOUR_DIGIT_YEAR
    # Conversão de datas
    STRATEGY_TRUST_THRESHOLD = DateParsingConfig.STRATEGY_TRUST_THRESHOLD
    YEAR_MIN = DateParsingConfig.YEAR_MIN
    YEAR_MAX = DateParsingConfig.YEAR_MAX
    TWO_DIGIT_YEAR_WINDOW = DateParsingConfig.TWO_DIGIT_YEAR_WINDOW
    # Tipo de dado e cabeçalhos
    DATE_TYPE_RATIO = ColumnAnalysisConfig.DATE_TYPE_RATIO
    NUMBER_TYPE_RATIO = ColumnAnalysisConfig.NUMBER_TYPE_RATIO
    TEXT_TYPE_RATIO = ColumnAnalysisConfig.TEXT_TYPE_RATIO
    SAMPLES_PER_COLUMN = ColumnAnalysisConfig.SAMPLES_PER_COLUMN
    HEADER_EXACT = ColumnAnalysisConfig.HEADER_EXACT
    HEADER_CONTAINS = ColumnAnalysisConfig.HEADER_CONTAINS
    HEADER_ABBREVIATION = ColumnAnalysisConfig.HEADER_ABBREVIATION
    HEADER_DATE_PARTIAL = ColumnAnalysisConfig.HEADER_DATE_PARTIAL
    TIER2_WEIGHT = ColumnAnalysisConfig.TIER2_WEIGHT
    DATE_BOOST = ColumnAnalysisConfig.DATE_BOOST
    DATE_BOOST_CAP = ColumnAnalysisConfig.DATE_BOOST_CAP
    DATE_BOOST_MIN_CONFIDENCE = ColumnAnalysisConfig.DATE_BOOST_MIN_CONFIDENCE
    MIN_ABBREVIATION_LENGTH = ColumnAnalysisConfig.MIN_ABBREVIATION_LENGTH
    # Colunas de início/término
    DATE_HEADER_EXACT = DateColumnConfig.HEADER_EXACT
    DATE_HEADER_CONTAINS = DateColumnConfig.HEADER_CONTAINS
    DATE_HEADER_ABBREVIATION = DateColumnConfig.HEADER_ABBREVIATION
    DATE_HEADER_WEIGHT = DateColumnConfig.HEADER_WEIGHT
    DATE_CONTENT_WEIGHT = DateColumnConfig.CONTENT_WEIGHT
    # Validação do mapeamento
    REQUIRED_MIN_CONFIDENCE = MappingValidationConfig.REQUIRED_MIN_CONFIDENCE
    EMPTY_RATIO_WARNING = MappingValidationConfig.EMPTY_RATIO_WARNING
    DATE_CONFIDENCE_WARNING = MappingValidationConfig.DATE_CONFIDENCE_WARNING
    # Prazo, vigência e fallback posicional
    PERIOD_MAX_DAYS = PeriodConfig.MAX_DAYS
    PERIOD_MAX_MONTHS_DAYS = PeriodConfig.MAX_MONTHS_DAYS
    EXPIRING_SOON_DAYS = PeriodConfig.EXPIRING_SOON_DAYS
    FLEXIBLE_MIN_CELLS = PeriodConfig.FLEXIBLE_MIN_CELLS
