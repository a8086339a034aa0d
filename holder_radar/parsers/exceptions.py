class HolderRadarError(Exception):
    pass


class InvalidMintAddress(HolderRadarError):
    pass


class UpstreamUnavailable(HolderRadarError):
    pass


class AccountDecodeError(HolderRadarError):
    pass


class ClassificationLookupFailure(HolderRadarError):
    pass


class NoHistory(ClassificationLookupFailure):
    pass
