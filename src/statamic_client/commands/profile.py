"""Profile commands -- store connection settings for Statamic sites.

A profile bundles the API URL, the default multi-site handle and the HTTP
request options for one site. Profiles are saved as JSON under the config
directory (see :func:`~statamic_client.config.get_profiles_dir`) and
selected with ``--profile``, ``STATAMIC_PROFILE`` or the global
``default_profile`` setting.
"""

from __future__ import annotations

from typing import Optional

import typer

from statamic_client.exceptions import ConfigError
from statamic_client.output import error, format_response, info, print_table, success, suggest


profile_app = typer.Typer(no_args_is_help=True)


def _parse_headers(raw_headers: Optional[list[str]]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in raw_headers or []:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            error(f"Invalid header '{raw}'. Expected 'Name: value'")
            raise typer.Exit(code=2)
        headers[name.strip()] = value.strip()
    return headers


@profile_app.command("add")
def profile_add(
    name: str = typer.Argument(help="Profile name."),
    api_url: str = typer.Argument(help="Statamic API URL, e.g. https://example.com/api/"),
    site: Optional[str] = typer.Option(None, "--site", help="Default multi-site handle."),
    header: Optional[list[str]] = typer.Option(
        None, "--header", "-H", help="Extra request header 'Name: value' (repeatable)."
    ),
    timeout: float = typer.Option(30.0, "--timeout", help="Request timeout in seconds."),
    no_verify_ssl: bool = typer.Option(
        False, "--no-verify-ssl", help="Do not verify SSL certificates."
    ),
    make_default: bool = typer.Option(
        False, "--default", help="Make this the default profile."
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing profile."),
) -> None:
    """Create a profile.

    Example::

        statamic-client profile add prod https://example.com/api/ --site en --default
    """
    from statamic_client.client import Client
    from statamic_client.config import (
        load_global_config,
        profile_exists,
        save_global_config,
        save_profile,
    )
    from statamic_client.models import Profile, RequestOptions

    if profile_exists(name) and not force:
        error(f"Profile '{name}' already exists.")
        suggest("Pass --force to overwrite it.")
        raise typer.Exit(code=2)

    options = RequestOptions(
        headers=_parse_headers(header),
        timeout=timeout,
        verify_ssl=not no_verify_ssl,
    )
    try:
        # Validates the URL the same way the client does.
        Client(api_url, request_options=options, default_site=site)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    save_profile(Profile(name=name, api_url=api_url, default_site=site, request=options))
    success(f"Profile '{name}' saved.")

    if make_default:
        config = load_global_config()
        config.default_profile = name
        save_global_config(config)
        info(f"Default profile set to '{name}'.")


@profile_app.command("list")
def profile_list() -> None:
    """List stored profiles."""
    from statamic_client.config import list_profiles, load_global_config, load_profile

    names = list_profiles()
    if not names:
        info("No profiles found.")
        suggest("Create one with 'statamic-client profile add NAME API_URL'.")
        return

    default = load_global_config().default_profile
    rows = []
    for name in names:
        profile = load_profile(name)
        rows.append([
            name,
            profile.api_url,
            profile.default_site or "",
            "*" if name == default else "",
        ])
    print_table(["name", "api_url", "default_site", "default"], rows, title="Profiles")


@profile_app.command("show")
def profile_show(name: str = typer.Argument(help="Profile name.")) -> None:
    """Show a stored profile."""
    from statamic_client.config import load_profile

    try:
        profile = load_profile(name)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    format_response(profile.model_dump(mode="json"))


@profile_app.command("remove")
def profile_remove(name: str = typer.Argument(help="Profile name.")) -> None:
    """Delete a stored profile."""
    from statamic_client.config import delete_profile, load_global_config, save_global_config

    try:
        delete_profile(name)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    config = load_global_config()
    if config.default_profile == name:
        config.default_profile = None
        save_global_config(config)
    success(f"Profile '{name}' removed.")


@profile_app.command("use")
def profile_use(name: str = typer.Argument(help="Profile name.")) -> None:
    """Make a stored profile the default."""
    from statamic_client.config import load_global_config, profile_exists, save_global_config

    if not profile_exists(name):
        error(f"Profile '{name}' not found.")
        raise typer.Exit(code=2)

    config = load_global_config()
    config.default_profile = name
    save_global_config(config)
    success(f"Default profile set to '{name}'.")
