from enum import Enum


class ExerciseStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class VatException(str, Enum):
    """VAT exemption/exception reasons a product can carry."""

    ES_20 = "ES_20"
    ES_21 = "ES_21"
    ES_22 = "ES_22"
    ES_23_24 = "ES_23_24"
    ES_25 = "ES_25"
    ES_OTHER = "ES_OTHER"
    ES_PASSIVE_SUBJECT = "ES_PASSIVE_SUBJECT"
    ES_NOT_SUBJECT = "ES_NOT_SUBJECT"


VAT_EXCEPTION_LABELS = {
    VatException.ES_20: "Exempt under article 20",
    VatException.ES_21: "Exempt under article 21 (exports)",
    VatException.ES_22: "Exempt under article 22",
    VatException.ES_23_24: "Exempt under articles 23 and 24",
    VatException.ES_25: "Exempt under article 25 (intra-community delivery)",
    VatException.ES_OTHER: "Exempt for other reasons",
    VatException.ES_PASSIVE_SUBJECT: "Reverse charge",
    VatException.ES_NOT_SUBJECT: "Not subject to VAT",
}
