from nonfungible.tokens.core import NonFungibleCore, Base, Enumerable, Consecutive, ConsecutiveEnumerable
from nonfungible.tokens.events import EventSink
from nonfungible.tokens.pausable import Pausable
from nonfungible.tokens.access import MinterGuard
