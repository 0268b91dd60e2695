from nonfungible.exceptions import Unauthorized

MINT_OPERATIONS = ('mint', 'batch_mint', 'non_sequential_mint')


class MinterGuard:
    """Restricts the minting operations of a token to a single admin account."""
    def __init__(self, admin, operations=MINT_OPERATIONS):
        self.admin = admin
        self.operations = tuple(operations)

    def __call__(self, token, operation):
        if operation not in self.operations:
            return

        caller = token.context.caller
        if caller != self.admin:
            raise Unauthorized(account=caller, action=operation)
