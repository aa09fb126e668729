import logging
import platform
import sys
from pathlib import Path
from typing import Optional

import click

from kontext import __version__, ui
from kontext.cluster import ClusterNamespaceLister
from kontext.errors import KontextError, SelectionCancelled
from kontext.ordering import order_names
from kontext.registry import ContextRegistry
from kontext.storage.kubeconfig_storage import KubeConfigStorage

# seconds; namespace completion waits this long when --timeout is not given
COMPLETION_TIMEOUT = 5.0


class DefaultCommandGroup(click.Group):
    """Group that treats an unknown first word as an argument to a default command.

    ``kontext my-context`` runs ``kontext switch my-context``. KontextError
    raised by any command is reported and turned into exit code 1.
    """

    default_command = "switch"

    def resolve_command(self, ctx, args):
        if args and self.get_command(ctx, args[0]) is None:
            return self.default_command, self.get_command(ctx, self.default_command), args
        return super().resolve_command(ctx, args)

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except SelectionCancelled as exc:
            ui.print_warning(str(exc).capitalize())
            ctx.exit(0)
        except KontextError as exc:
            ui.print_error("Error", exc)
            ctx.exit(1)


def _storage_from_root(ctx: click.Context) -> KubeConfigStorage:
    path = ctx.find_root().params.get("kubeconfig")
    return KubeConfigStorage(path)


def complete_contexts(ctx, param, incomplete):
    """Shell completion for context names"""
    try:
        contexts = _storage_from_root(ctx).load().contexts
    except KontextError:
        return []
    return [name for name in sorted(contexts) if name.startswith(incomplete)]


def complete_namespaces(ctx, param, incomplete):
    """Shell completion for namespaces of the targeted context (the current one by default)"""
    timeout = ctx.find_root().params.get("timeout") or COMPLETION_TIMEOUT
    registry = ContextRegistry(_storage_from_root(ctx), ClusterNamespaceLister(request_timeout=timeout))
    try:
        names = registry.available_namespaces(ctx.params.get("context_name") or "").names
    except KontextError:
        return []
    return [name for name in sorted(names) if name.startswith(incomplete)]


def _exit_unknown_context(name: str, contexts, current: str):
    ui.print_error(f"Context '{name}' does not exist")
    ui.print_context_list(order_names(list(contexts), current), current)
    sys.exit(1)


@click.group(cls=DefaultCommandGroup, invoke_without_command=True,
             context_settings={"ignore_unknown_options": True, "help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="kontext")
@click.option("--kubeconfig", type=click.Path(dir_okay=False, path_type=Path), envvar="KUBECONFIG",
              help="Path to the kubeconfig file (default: $KUBECONFIG or ~/.kube/config)")
@click.option("--timeout", type=float, default=None,
              help="Seconds to wait for the cluster when listing namespaces")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, kubeconfig, timeout, verbose):
    """Kontext - manage your Kubernetes contexts and namespaces

    \b
    Examples:
      kontext list                        # List all available contexts
      kontext current                     # Show the current context
      kontext switch my-context           # Switch to a specific context
      kontext my-context                  # Same as switch
      kontext -n                          # Pick a context, then a namespace
      kontext my-context -n my-namespace  # Switch context and set namespace
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = ContextRegistry(KubeConfigStorage(kubeconfig),
                              ClusterNamespaceLister(request_timeout=timeout))
    if ctx.invoked_subcommand is None:
        ctx.invoke(switch)


@cli.command("list")
@click.pass_obj
def list_contexts(registry: ContextRegistry):
    """List available Kubernetes contexts"""
    contexts = registry.list_contexts()
    current = registry.current_context_name()
    if not contexts:
        ui.print_warning("No contexts found in kubeconfig")
        return
    ui.print_context_list(order_names(list(contexts), current), current)


@cli.command()
@click.pass_obj
def current(registry: ContextRegistry):
    """Show current Kubernetes context"""
    name = registry.current_context_name()
    if not name:
        ui.print_warning("No current context set")
        return
    ui.print_current_context(name)


def _select_namespace(registry: ContextRegistry, context_name: str, current_namespace: str) -> str:
    listing = registry.available_namespaces(context_name)
    if listing.is_fallback:
        ui.print_note("Could not reach the cluster, showing common namespaces")
    ordered = order_names(listing.names, current_namespace, prioritize_current=True)
    return ui.choose(ordered, current_namespace, label="Select Namespace:")


def _apply_namespace(registry: ContextRegistry, context_name: str, current_namespace: str, namespace: str):
    if namespace == current_namespace:
        ui.print_warning(f"Namespace '{namespace}' is already selected")
        return
    registry.set_namespace_for_context(context_name, namespace)
    ui.print_success(f"Switched to namespace {namespace} in context", context_name)


@cli.command()
@click.argument("context_name", required=False, shell_complete=complete_contexts)
@click.option("-n", "--set-namespace", "namespace", is_flag=False, flag_value="", default=None,
              metavar="[NAMESPACE]", shell_complete=complete_namespaces,
              help="Also set the namespace after switching (pick one when no value is given)")
@click.pass_obj
def switch(registry: ContextRegistry, context_name: Optional[str], namespace: Optional[str]):
    """Switch to a specific Kubernetes context

    If no context is given, an interactive selection menu is displayed.
    """
    contexts = registry.list_contexts()
    current_name = registry.current_context_name()
    if not contexts:
        ui.print_warning("No contexts found in kubeconfig")
        return

    if not context_name:
        ordered = order_names(list(contexts), current_name, prioritize_current=True)
        context_name = ui.choose(ordered, current_name, label="Select Kubernetes Context:")
    elif context_name not in contexts:
        _exit_unknown_context(context_name, contexts, current_name)

    if context_name == current_name:
        ui.print_warning(f"Context '{context_name}' is already selected")
        ui.print_pointer("Current namespace", contexts[context_name].effective_namespace)
    else:
        registry.switch_context(context_name)
        ui.print_success("Switched to context", context_name)
        ui.print_pointer("Namespace", registry.namespace_for_context(context_name))

    if namespace is None:
        return

    current_namespace = registry.namespace_for_context(context_name)
    if namespace == "":
        namespace = _select_namespace(registry, context_name, current_namespace)
    else:
        listing = registry.available_namespaces(context_name)
        if listing.live and namespace not in listing.names:
            # the user asked for it explicitly, so set it anyway
            ui.print_warning(f"Namespace '{namespace}' does not exist in context '{context_name}'")
    _apply_namespace(registry, context_name, current_namespace, namespace)


@cli.command()
@click.argument("context_name", required=False, shell_complete=complete_contexts)
@click.option("-y", "--yes", is_flag=True, help="Delete without asking for confirmation")
@click.pass_obj
def delete(registry: ContextRegistry, context_name: Optional[str], yes: bool):
    """Delete a Kubernetes context from your kubeconfig

    Clusters and users no other context refers to are removed as well. If no
    context is given, an interactive selector is displayed.
    """
    contexts = registry.list_contexts()
    current_name = registry.current_context_name()
    if not contexts:
        ui.print_warning("No contexts found in kubeconfig")
        return

    if not context_name:
        ordered = order_names(list(contexts), current_name, prioritize_current=True)
        context_name = ui.choose(ordered, current_name, label="Select Kubernetes Context:")
    elif context_name not in contexts:
        _exit_unknown_context(context_name, contexts, current_name)

    if context_name == current_name:
        ui.print_warning(f"You are about to delete the current context '{context_name}'",
                         "(current context will be unset)")

    if not yes and not ui.confirm(f"Delete context '{context_name}' from kubeconfig?"):
        ui.print_warning("Context deletion canceled", context_name)
        return

    result = registry.delete_context(context_name)
    ui.print_success("Deleted context", context_name)
    if result.pruned_cluster:
        ui.print_note("Removed unused cluster", result.pruned_cluster)
    if result.pruned_auth_info:
        ui.print_note("Removed unused user", result.pruned_auth_info)


@cli.command("namespace")
@click.argument("namespace", required=False, shell_complete=complete_namespaces)
@click.option("-s", "--show", is_flag=True, help="Only show the current namespace without the selector")
@click.option("-c", "--context", "context_name", default="", shell_complete=complete_contexts,
              help="Context to act on (default: current context)")
@click.pass_obj
def namespace_cmd(registry: ContextRegistry, namespace: Optional[str], show: bool, context_name: str):
    """View or change the namespace of a context

    If no namespace is given, an interactive selection menu is displayed.
    """
    if context_name:
        current_namespace = registry.namespace_for_context(context_name)
    else:
        current_namespace = registry.current_namespace()
        context_name = registry.current_context_name()

    if show:
        ui.print_current_namespace(context_name, current_namespace)
        return

    if namespace is None:
        namespace = _select_namespace(registry, context_name, current_namespace)
    _apply_namespace(registry, context_name, current_namespace, namespace)


@cli.command()
def version():
    """Print the version information of kontext"""
    ui.print_info("Kontext", __version__)
    ui.print_info("Python", platform.python_version())
    ui.print_info("Platform", f"{platform.system().lower()}/{platform.machine()}")


cli.add_command(delete, name="rm")
cli.add_command(namespace_cmd, name="ns")


if __name__ == '__main__':
    cli()
