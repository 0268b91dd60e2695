class NonFungibleError(Exception):
    """
    The base exception for token state errors. The fmt directive
    will be overloaded by the inheriting classes, and code is the
    stable outcome code reported back to callers of the executor.

    :ivar msg: The message associated with the error
    :ivar code: Integer outcome code
    """
    fmt = 'An unspecified error occurred'
    code = 0

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class TokenNotFound(NonFungibleError):
    """
    The token id was never minted or has been burned.

    :ivar token_id: The id that was looked up
    """
    fmt = 'Token {token_id} does not exist'
    code = 300


class NotOwner(NonFungibleError):
    """
    The account given as owner does not hold the token.

    :ivar account: The account that claimed ownership
    :ivar token_id: The token in question
    """
    fmt = "Account '{account}' is not the owner of token {token_id}"
    code = 301


class Unauthorized(NonFungibleError):
    """
    The caller is neither the owner, the approved spender nor an operator.
    """
    fmt = "Account '{account}' is not authorized to {action}"
    code = 302


class InvalidExpiration(NonFungibleError):
    fmt = 'Invalid approval expiration: {reason}'
    code = 304


class MathOverflow(NonFungibleError):
    fmt = "Balance of '{account}' would leave the allowed range"
    code = 305


class TokenIdsDepleted(NonFungibleError):
    fmt = 'Cannot allocate {count} more token ids, next id is {next_id}'
    code = 306


class TokenIdInUse(NonFungibleError):
    fmt = 'Token id {token_id} has already been used'
    code = 307


class TokenNotFoundInOwnerList(NonFungibleError):
    fmt = "No token at index {index} for owner '{owner}'"
    code = 308


class TokenNotFoundInGlobalList(NonFungibleError):
    fmt = 'No token at global index {index}'
    code = 309


class AlreadyBurned(TokenNotFound):
    """
    Burn was requested for a token that is already burned. Subclasses
    TokenNotFound since a burned token no longer exists.
    """
    fmt = 'Token {token_id} has already been burned'
    code = 310


class InvalidReceiver(NonFungibleError):
    fmt = "Account '{account}' cannot receive tokens"
    code = 311


class ZeroCount(NonFungibleError):
    fmt = 'Batch mint requires a positive count'
    code = 312


class InvalidMetadata(NonFungibleError):
    fmt = 'Invalid {field}: {reason}'
    code = 313


class LayoutMismatch(NonFungibleError):
    """
    The namespace already holds state written under a different storage
    layout.

    :ivar contract: The token namespace
    :ivar stored: Layout tag found in storage
    :ivar requested: Layout tag of the variant being constructed
    """
    fmt = "Token '{contract}' uses layout '{stored}', cannot open it as '{requested}'"
    code = 320


class PausedError(NonFungibleError):
    fmt = "Token '{contract}' is paused, '{operation}' rejected"
    code = 1000


class NotPausedError(NonFungibleError):
    fmt = "Token '{contract}' is not paused"
    code = 1001
