class RpcError(Exception):
    pass


class RpcHttpError(RpcError):
    pass


class RpcResponseError(RpcError):
    pass


class RpcTransportError(RpcError):
    pass
