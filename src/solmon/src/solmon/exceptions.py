class SolmonError(Exception):
    pass


class RPCError(SolmonError):
    """A JSON-RPC call failed: transport error, bad status, RPC error member or undecodable result."""

    def __init__(self, method: str, message: str):
        self.method = method
        super().__init__(f"{method}: {message}")


class ValidatorNotFoundError(SolmonError):
    def __init__(self, pubkey: str):
        self.pubkey = pubkey
        super().__init__(f"No vote account found for {pubkey}")
