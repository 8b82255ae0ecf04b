"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to subcommands via
``@click.pass_obj``.  Provides lazy provisioner construction and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from svcat.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from svcat.config.settings import SvcatSettings
    from svcat.infrastructure.provisioner import Provisioner
    from svcat.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The provisioner is created on first use so ``--help`` and
    ``--examples`` never look for kubectl.
    """

    def __init__(self, settings: SvcatSettings) -> None:
        self.settings = settings
        self._provisioner: Provisioner | None = None

        from svcat.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def provisioner(self) -> Provisioner:
        """The provisioning collaborator (created lazily on first access)."""
        if self._provisioner is None:
            from svcat.infrastructure import kubectl

            self._provisioner = kubectl.KubectlProvisioner(self.settings.kubectl)
        return self._provisioner

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
