"""Built-in CLI sub-commands for specdoc.

* :mod:`~specdoc.commands.generate` -- write ``apis.json`` and ``models.json``.
* :mod:`~specdoc.commands.inspect` -- print API or model records.
* :mod:`~specdoc.commands.analyze` -- report documentation defects.

Single commands export a plain callback registered on the root app; the
``inspect`` group exports a :class:`typer.Typer` sub-application.
"""
