"""Application constants."""

USER_AGENT = "sus-choropleth/0.3 (+research; contact: configured-email)"
COMMANDS = (
    "records",
    "check",
    "render",
)
EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "region",
    "source",
    "event",
    "status",
    "rows_in",
    "rows_out",
    "error_code",
    "message",
)

# IBGE state (UF) prefix of the 6-digit municipality code.
REGION_CODE_BY_PREFIX = {
    11: "RO", 12: "AC", 13: "AM", 14: "RR", 15: "PA", 16: "AP", 17: "TO",
    21: "MA", 22: "PI", 23: "CE", 24: "RN", 25: "PB", 26: "PE", 27: "AL", 28: "SE", 29: "BA",
    31: "MG", 32: "ES", 33: "RJ", 35: "SP",
    41: "PR", 42: "SC", 43: "RS",
    50: "MS", 51: "MT", 52: "GO", 53: "DF",
}
SUPPORTED_REGIONS = tuple(REGION_CODE_BY_PREFIX.values())

REGION_NAME_BY_CODE = {
    "RO": "Rondônia",
    "AC": "Acre",
    "AM": "Amazonas",
    "RR": "Roraima",
    "PA": "Pará",
    "AP": "Amapá",
    "TO": "Tocantins",
    "MA": "Maranhão",
    "PI": "Piauí",
    "CE": "Ceará",
    "RN": "Rio Grande do Norte",
    "PB": "Paraíba",
    "PE": "Pernambuco",
    "AL": "Alagoas",
    "SE": "Sergipe",
    "BA": "Bahia",
    "MG": "Minas Gerais",
    "ES": "Espírito Santo",
    "RJ": "Rio de Janeiro",
    "SP": "São Paulo",
    "PR": "Paraná",
    "SC": "Santa Catarina",
    "RS": "Rio Grande do Sul",
    "MS": "Mato Grosso do Sul",
    "MT": "Mato Grosso",
    "GO": "Goiás",
    "DF": "Distrito Federal",
}

# Absence of a hospitalisation record means zero hospitalisations.
MISSING_METRIC_DEFAULT = 0.0

DUPLICATE_POLICIES = ("first", "error")
BOUNDARY_SOURCES = ("ibge", "file")
