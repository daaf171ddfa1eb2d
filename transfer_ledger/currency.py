"""
Currency Support Module

Handles ISO 4217 currency codes and Decimal coercion for monetary values.
NEVER uses float for monetary values. There is no conversion between
currencies: a code is carried alongside an amount, nothing more.
"""

from decimal import Decimal, Inexact, InvalidOperation, getcontext, localcontext
from enum import Enum
from typing import Union

# Set global decimal context for financial precision
getcontext().prec = 28


class Currency(Enum):
    """ISO 4217 Currency Codes with precision (minor unit digits)"""
    AED = ("AED", 2)  # UAE Dirham
    AFN = ("AFN", 2)  # Afghani
    ALL = ("ALL", 2)  # Albanian Lek
    AMD = ("AMD", 2)  # Armenian Dram
    ANG = ("ANG", 2)  # Netherlands Antillean Guilder
    AOA = ("AOA", 2)  # Kwanza
    ARS = ("ARS", 2)  # Argentine Peso
    AUD = ("AUD", 2)  # Australian Dollar
    AWG = ("AWG", 2)  # Aruban Florin
    AZN = ("AZN", 2)  # Azerbaijan Manat
    BAM = ("BAM", 2)  # Convertible Mark
    BBD = ("BBD", 2)  # Barbados Dollar
    BDT = ("BDT", 2)  # Taka
    BGN = ("BGN", 2)  # Bulgarian Lev
    BHD = ("BHD", 3)  # Bahraini Dinar
    BIF = ("BIF", 0)  # Burundi Franc
    BMD = ("BMD", 2)  # Bermudian Dollar
    BND = ("BND", 2)  # Brunei Dollar
    BOB = ("BOB", 2)  # Boliviano
    BOV = ("BOV", 2)  # Mvdol
    BRL = ("BRL", 2)  # Brazilian Real
    BSD = ("BSD", 2)  # Bahamian Dollar
    BTN = ("BTN", 2)  # Ngultrum
    BWP = ("BWP", 2)  # Pula
    BYN = ("BYN", 2)  # Belarusian Ruble
    BZD = ("BZD", 2)  # Belize Dollar
    CAD = ("CAD", 2)  # Canadian Dollar
    CDF = ("CDF", 2)  # Congolese Franc
    CHE = ("CHE", 2)  # WIR Euro
    CHF = ("CHF", 2)  # Swiss Franc
    CHW = ("CHW", 2)  # WIR Franc
    CLF = ("CLF", 4)  # Unidad de Fomento
    CLP = ("CLP", 0)  # Chilean Peso
    CNY = ("CNY", 2)  # Chinese Yuan
    COP = ("COP", 2)  # Colombian Peso
    COU = ("COU", 2)  # Unidad de Valor Real
    CRC = ("CRC", 2)  # Costa Rican Colon
    CUC = ("CUC", 2)  # Peso Convertible
    CUP = ("CUP", 2)  # Cuban Peso
    CVE = ("CVE", 2)  # Cabo Verde Escudo
    CZK = ("CZK", 2)  # Czech Koruna
    DJF = ("DJF", 0)  # Djibouti Franc
    DKK = ("DKK", 2)  # Danish Krone
    DOP = ("DOP", 2)  # Dominican Peso
    DZD = ("DZD", 2)  # Algerian Dinar
    EGP = ("EGP", 2)  # Egyptian Pound
    ERN = ("ERN", 2)  # Nakfa
    ETB = ("ETB", 2)  # Ethiopian Birr
    EUR = ("EUR", 2)  # Euro
    FJD = ("FJD", 2)  # Fiji Dollar
    FKP = ("FKP", 2)  # Falkland Islands Pound
    GBP = ("GBP", 2)  # British Pound
    GEL = ("GEL", 2)  # Lari
    GHS = ("GHS", 2)  # Ghana Cedi
    GIP = ("GIP", 2)  # Gibraltar Pound
    GMD = ("GMD", 2)  # Dalasi
    GNF = ("GNF", 0)  # Guinean Franc
    GTQ = ("GTQ", 2)  # Quetzal
    GYD = ("GYD", 2)  # Guyana Dollar
    HKD = ("HKD", 2)  # Hong Kong Dollar
    HNL = ("HNL", 2)  # Lempira
    HTG = ("HTG", 2)  # Gourde
    HUF = ("HUF", 2)  # Hungarian Forint
    IDR = ("IDR", 2)  # Rupiah
    ILS = ("ILS", 2)  # New Israeli Sheqel
    INR = ("INR", 2)  # Indian Rupee
    IQD = ("IQD", 3)  # Iraqi Dinar
    IRR = ("IRR", 2)  # Iranian Rial
    ISK = ("ISK", 0)  # Iceland Krona
    JMD = ("JMD", 2)  # Jamaican Dollar
    JOD = ("JOD", 3)  # Jordanian Dinar
    JPY = ("JPY", 0)  # Japanese Yen
    KES = ("KES", 2)  # Kenyan Shilling
    KGS = ("KGS", 2)  # Som
    KHR = ("KHR", 2)  # Riel
    KMF = ("KMF", 0)  # Comorian Franc
    KPW = ("KPW", 2)  # North Korean Won
    KRW = ("KRW", 0)  # South Korean Won
    KWD = ("KWD", 3)  # Kuwaiti Dinar
    KYD = ("KYD", 2)  # Cayman Islands Dollar
    KZT = ("KZT", 2)  # Tenge
    LAK = ("LAK", 2)  # Lao Kip
    LBP = ("LBP", 2)  # Lebanese Pound
    LKR = ("LKR", 2)  # Sri Lanka Rupee
    LRD = ("LRD", 2)  # Liberian Dollar
    LSL = ("LSL", 2)  # Loti
    LYD = ("LYD", 3)  # Libyan Dinar
    MAD = ("MAD", 2)  # Moroccan Dirham
    MDL = ("MDL", 2)  # Moldovan Leu
    MGA = ("MGA", 2)  # Malagasy Ariary
    MKD = ("MKD", 2)  # Denar
    MMK = ("MMK", 2)  # Kyat
    MNT = ("MNT", 2)  # Tugrik
    MOP = ("MOP", 2)  # Pataca
    MRU = ("MRU", 2)  # Ouguiya
    MUR = ("MUR", 2)  # Mauritius Rupee
    MVR = ("MVR", 2)  # Rufiyaa
    MWK = ("MWK", 2)  # Malawi Kwacha
    MXN = ("MXN", 2)  # Mexican Peso
    MXV = ("MXV", 2)  # Mexican Unidad de Inversion
    MYR = ("MYR", 2)  # Malaysian Ringgit
    MZN = ("MZN", 2)  # Mozambique Metical
    NAD = ("NAD", 2)  # Namibia Dollar
    NGN = ("NGN", 2)  # Naira
    NIO = ("NIO", 2)  # Cordoba Oro
    NOK = ("NOK", 2)  # Norwegian Krone
    NPR = ("NPR", 2)  # Nepalese Rupee
    NZD = ("NZD", 2)  # New Zealand Dollar
    OMR = ("OMR", 3)  # Rial Omani
    PAB = ("PAB", 2)  # Balboa
    PEN = ("PEN", 2)  # Sol
    PGK = ("PGK", 2)  # Kina
    PHP = ("PHP", 2)  # Philippine Peso
    PKR = ("PKR", 2)  # Pakistan Rupee
    PLN = ("PLN", 2)  # Polish Zloty
    PYG = ("PYG", 0)  # Guarani
    QAR = ("QAR", 2)  # Qatari Rial
    RON = ("RON", 2)  # Romanian Leu
    RSD = ("RSD", 2)  # Serbian Dinar
    RUB = ("RUB", 2)  # Russian Ruble
    RWF = ("RWF", 0)  # Rwanda Franc
    SAR = ("SAR", 2)  # Saudi Riyal
    SBD = ("SBD", 2)  # Solomon Islands Dollar
    SCR = ("SCR", 2)  # Seychelles Rupee
    SDG = ("SDG", 2)  # Sudanese Pound
    SEK = ("SEK", 2)  # Swedish Krona
    SGD = ("SGD", 2)  # Singapore Dollar
    SHP = ("SHP", 2)  # Saint Helena Pound
    SLE = ("SLE", 2)  # Leone
    SLL = ("SLL", 2)  # Leone (old)
    SOS = ("SOS", 2)  # Somali Shilling
    SRD = ("SRD", 2)  # Surinam Dollar
    SSP = ("SSP", 2)  # South Sudanese Pound
    STN = ("STN", 2)  # Dobra
    SVC = ("SVC", 2)  # El Salvador Colon
    SYP = ("SYP", 2)  # Syrian Pound
    SZL = ("SZL", 2)  # Lilangeni
    THB = ("THB", 2)  # Baht
    TJS = ("TJS", 2)  # Somoni
    TMT = ("TMT", 2)  # Turkmenistan New Manat
    TND = ("TND", 3)  # Tunisian Dinar
    TOP = ("TOP", 2)  # Pa'anga
    TRY = ("TRY", 2)  # Turkish Lira
    TTD = ("TTD", 2)  # Trinidad and Tobago Dollar
    TWD = ("TWD", 2)  # New Taiwan Dollar
    TZS = ("TZS", 2)  # Tanzanian Shilling
    UAH = ("UAH", 2)  # Hryvnia
    UGX = ("UGX", 0)  # Uganda Shilling
    USD = ("USD", 2)  # US Dollar
    USN = ("USN", 2)  # US Dollar (Next day)
    UYI = ("UYI", 0)  # Uruguay Peso en Unidades Indexadas
    UYU = ("UYU", 2)  # Peso Uruguayo
    UYW = ("UYW", 4)  # Unidad Previsional
    UZS = ("UZS", 2)  # Uzbekistan Sum
    VED = ("VED", 2)  # Bolivar Soberano (digital)
    VES = ("VES", 2)  # Bolivar Soberano
    VND = ("VND", 0)  # Dong
    VUV = ("VUV", 0)  # Vatu
    WST = ("WST", 2)  # Tala
    XAF = ("XAF", 0)  # CFA Franc BEAC
    XCD = ("XCD", 2)  # East Caribbean Dollar
    XCG = ("XCG", 2)  # Caribbean Guilder
    XOF = ("XOF", 0)  # CFA Franc BCEAO
    XPF = ("XPF", 0)  # CFP Franc
    YER = ("YER", 2)  # Yemeni Rial
    ZAR = ("ZAR", 2)  # South African Rand
    ZMW = ("ZMW", 2)  # Zambian Kwacha
    ZWG = ("ZWG", 2)  # Zimbabwe Gold
    ZWL = ("ZWL", 2)  # Zimbabwe Dollar

    # Funds, precious metals and testing codes have no minor unit
    XAG = ("XAG", 0)  # Silver
    XAU = ("XAU", 0)  # Gold
    XBA = ("XBA", 0)  # European Composite Unit
    XBB = ("XBB", 0)  # European Monetary Unit
    XBC = ("XBC", 0)  # European Unit of Account 9
    XBD = ("XBD", 0)  # European Unit of Account 17
    XDR = ("XDR", 0)  # SDR (Special Drawing Right)
    XPD = ("XPD", 0)  # Palladium
    XPT = ("XPT", 0)  # Platinum
    XSU = ("XSU", 0)  # Sucre
    XTS = ("XTS", 0)  # Reserved for testing
    XUA = ("XUA", 0)  # ADB Unit of Account
    XXX = ("XXX", 0)  # No currency

    def __init__(self, code: str, precision: int):
        self.code = code
        self.precision = precision

    @classmethod
    def from_code(cls, code: str) -> 'Currency':
        """
        Look up a currency by its ISO code (case-insensitive)

        Raises:
            ValueError: If the code is not a supported ISO 4217 code
        """
        if not isinstance(code, str):
            raise ValueError(f"Currency code must be a string, got {type(code).__name__}")
        try:
            return cls[code.strip().upper()]
        except KeyError:
            raise ValueError(f"Unsupported currency code: {code!r}") from None

    def __str__(self) -> str:
        return self.code


def to_decimal(value: Union[Decimal, int, str, float]) -> Decimal:
    """
    Convert a value to Decimal without going through binary float rounding

    Floats are converted via their shortest repr, so 500.2 becomes
    Decimal('500.2') rather than Decimal('500.19999999999998863...').

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError("Boolean is not a monetary amount")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValueError(f"Cannot convert {value!r} to Decimal") from None
    if not result.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return result


def _exact_precision(a: Decimal, b: Decimal) -> int:
    """Digits needed to hold a + b (or a - b) without rounding"""
    highest = max(a.adjusted(), b.adjusted()) + 1  # room for a carry
    lowest = min(a.as_tuple().exponent, b.as_tuple().exponent)
    return max(highest - lowest + 1, getcontext().prec)


def add_exact(a: Decimal, b: Decimal) -> Decimal:
    """
    a + b with no rounding, however many digits the result needs

    The global context rounds to 28 significant digits; balances must
    never lose a digit, so the sum is computed in a local context sized
    to both operands.
    """
    with localcontext() as ctx:
        ctx.prec = _exact_precision(a, b)
        ctx.traps[Inexact] = True
        return a + b


def subtract_exact(a: Decimal, b: Decimal) -> Decimal:
    """a - b with no rounding"""
    with localcontext() as ctx:
        ctx.prec = _exact_precision(a, b)
        ctx.traps[Inexact] = True
        return a - b


def is_positive(amount: Decimal) -> bool:
    """Check if amount is strictly positive"""
    return amount > Decimal('0')


def format_amount(amount: Decimal, currency: Currency) -> str:
    """Format for display, e.g. 'EUR 1,250.00'"""
    if currency.precision == 0:
        return f"{currency.code} {amount:,.0f}"
    return f"{currency.code} {amount:,.{currency.precision}f}"
