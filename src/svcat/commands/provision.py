"""Command: provision a new instance of a service."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from svcat.commands._base import SvcatCommand

if TYPE_CHECKING:
    from svcat.commands._context import AppContext


_PROVISION_EXAMPLES = """\
  svcat provision wordpress-mysql-instance --class mysqldb --plan free -p location=eastus -p sslEnforcement=disabled
  svcat provision wordpress-mysql-instance --class mysqldb --plan free -s mysecret[dbparams]
  svcat provision secure-instance --class mysqldb --plan secureDB --params-json '{
    "encrypt" : true,
    "firewallRules" : [
        {
            "name": "AllowSome",
            "startIPAddress": "75.70.113.50",
            "endIPAddress" : "75.70.113.131"
        }
    ]
  }'"""


@click.command(cls=SvcatCommand, examples=_PROVISION_EXAMPLES)
@click.argument("args", nargs=-1, metavar="NAME")
@click.option(
    "-n",
    "--namespace",
    default=None,
    help="The namespace in which to create the instance (default: 'default').",
)
@click.option("--class", "class_name", required=True, help="The class name (Required).")
@click.option("--plan", "plan_name", required=True, help="The plan name (Required).")
@click.option(
    "-p",
    "--param",
    "raw_params",
    multiple=True,
    help=(
        "Additional parameter to use when provisioning the service, format: NAME=VALUE. "
        "Cannot be combined with --params-json."
    ),
)
@click.option(
    "-s",
    "--secret",
    "raw_secrets",
    multiple=True,
    help=(
        "Additional parameter, whose value is stored in a secret, to use when "
        "provisioning the service, format: SECRET[KEY]."
    ),
)
@click.option(
    "--params-json",
    "json_params",
    default="",
    help=(
        "Additional parameters to use when provisioning the service, provided as "
        "a JSON object. Cannot be combined with --param."
    ),
)
@click.pass_obj
def provision(
    app: AppContext,
    args: tuple[str, ...],
    namespace: str | None,
    class_name: str,
    plan_name: str,
    raw_params: tuple[str, ...],
    raw_secrets: tuple[str, ...],
    json_params: str,
) -> None:
    """Create a new instance of a service."""
    from svcat.services.provision import ProvisionService

    result = ProvisionService(app.provisioner).provision(
        args,
        class_name=class_name,
        plan_name=plan_name,
        namespace=namespace or app.settings.provision.namespace,
        raw_params=raw_params,
        json_params=json_params,
        raw_secrets=raw_secrets,
    )
    app.emit(result)
