from dataclasses import dataclass


## === Printer Config === ##

@dataclass(frozen=True)
class PrinterConfig:
    """
    Configuration for the trie printers
        depth_indicator: str, repeated `level` times before each line of a depth rendering
        level_separator: str, joins the nodes of one level in a breadth rendering
        show_tags: bool, render the tags of each node after its value
    """
    depth_indicator: str = "."
    level_separator: str = " "
    show_tags: bool = True

    def __post_init__(self):
        if not isinstance(self.depth_indicator, str) or len(self.depth_indicator) != 1:
            raise ValueError("depth_indicator must be a single character")
        if not isinstance(self.level_separator, str) or not self.level_separator:
            raise ValueError("level_separator must be a non-empty string")
