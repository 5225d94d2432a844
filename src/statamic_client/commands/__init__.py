"""Built-in CLI sub-commands for statamic_client.

* :mod:`~statamic_client.commands.resources` -- one command per Statamic
  resource operation (``entries``, ``entry``, ``nav-tree``, ...).
* :mod:`~statamic_client.commands.profile` -- manage stored connection
  profiles.
* :mod:`~statamic_client.commands.config` -- view and modify global
  settings.
"""
