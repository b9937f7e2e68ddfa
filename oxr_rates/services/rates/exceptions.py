class RatesError(Exception):
    pass


class UnsupportedCurrency(RatesError):
    """Currency cannot be related to the base currency."""

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(currency)


class DataAcquisitionFailure(RatesError):
    """Fetching, reading, writing or parsing the rates document failed."""


class DocumentParseError(DataAcquisitionFailure):
    pass


class CacheFileError(DataAcquisitionFailure):
    pass
