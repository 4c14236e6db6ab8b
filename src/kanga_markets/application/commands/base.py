from dataclasses import dataclass, field


@dataclass
class Command:
    """Base command class"""

    name: str


@dataclass
class MarketsCommand(Command):
    """Refresh and list markets"""

    query: str = ""
    sort_fields: list[str] = field(default_factory=list)
    limit: int | None = None


@dataclass
class DepthCommand(Command):
    """Fetch and analyze one order book"""

    ticker_id: str = ""


@dataclass
class BrowseCommand(Command):
    """Interactive market list fed by lines of input"""

    query: str = ""
