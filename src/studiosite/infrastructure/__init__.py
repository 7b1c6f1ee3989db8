"""Infrastructure layer — filesystem, Markdown rendering, templates.

This layer depends on stdlib and third-party libs (mistune, Pygments,
BeautifulSoup, Jinja2). It must never import from services, commands,
or output. The service layer bridges between domain models and
infrastructure.
"""
