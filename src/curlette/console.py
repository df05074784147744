from rich.console import Console

# highlight is off so response text is shown as received
stdout = Console(highlight=False, soft_wrap=True)
stderr = Console(stderr=True, highlight=False, soft_wrap=True)
