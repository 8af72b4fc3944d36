from rich.theme import Theme

theme = Theme(
    {
        #
        "js.identifier": "cyan",
        "js.replacement": "green",
        "js.removed": "red strike",
        "js.range": "white dim",
        #
        "js.node": "magenta",
        "js.title": "cyan bold",
        "js.linenum": "white dim",
    }
)
