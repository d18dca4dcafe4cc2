"""Flux-loader get action."""

from argparse import (
    ArgumentParser,
    BooleanOptionalAction,
    _SubParsersAction as SubParsersAction,
)
import logging
import pathlib
import sys
from typing import Any, cast

from flux_loader import git_repo, loader
from flux_loader.config import DuplicatePolicy, LoadOptions, ParseOptions

from .format import Formatter, JsonFormatter, PrintFormatter, YamlFormatter

_LOGGER = logging.getLogger(__name__)

COLUMNS = ["namespace", "kind", "name", "source"]


class GetResourcesAction:
    """Get details about the resources defined in local manifests."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "resources",
                aliases=["res", "resource"],
                help="Get resources defined in local manifests",
                description="""Print the resources defined in the manifest files
                    under the given paths. Helm chart directories are skipped.""",
            ),
        )
        args.add_argument(
            "path",
            type=pathlib.Path,
            nargs="+",
            help="Directories or files with manifests",
        )
        args.add_argument(
            "--base",
            type=pathlib.Path,
            default=None,
            help="Directory that source paths are relative to, "
            "defaults to the git repo root",
        )
        args.add_argument(
            "--strict-file-duplicates",
            type=bool,
            default=False,
            action=BooleanOptionalAction,
            help="Fail when a resource is defined twice within the same file",
        )
        args.add_argument(
            "--output",
            "-o",
            choices=["table", "yaml", "json"],
            default="table",
            help="Output format of the command",
        )
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        path: list[pathlib.Path],
        base: pathlib.Path | None,
        strict_file_duplicates: bool,
        output: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        if base is None:
            base = git_repo.default_base(path[0])
        options = LoadOptions(
            parse=ParseOptions(
                duplicates_in_file=(
                    DuplicatePolicy.ERROR
                    if strict_file_duplicates
                    else DuplicatePolicy.OVERWRITE
                )
            )
        )
        resources = await loader.load(base, *path, options=options)
        if not resources:
            print("No resources found", file=sys.stderr)
            return

        results: list[dict[str, Any]] = [
            resources[key].to_dict() for key in sorted(resources)
        ]
        formatter: Formatter
        if output == "yaml":
            formatter = YamlFormatter()
        elif output == "json":
            formatter = JsonFormatter()
        else:
            formatter = PrintFormatter(COLUMNS)
        formatter.print(results)


class GetAction:
    """Flux-loader get action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "get",
                help="Print information about local resources",
                description="Print information about resources in local manifests",
            ),
        )
        subcmds = args.add_subparsers(
            title="Available commands",
            required=True,
        )
        GetResourcesAction.register(subcmds)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        # No-op given subcommands are always the dispatch target
