"""Flux-loader values action."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from typing import cast

from flux_loader.values import ChartParam, render_values


class ValuesAction:
    """Print chart values built from override parameters."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "values",
                help="Print chart values built from override parameters",
                description="""Merge name=value override parameters into a single
                    values document. Dotted names produce nested values and a value
                    in brackets is read as a JSON list.""",
            ),
        )
        args.add_argument(
            "params",
            nargs="*",
            metavar="NAME=VALUE",
            help="Override parameters, applied in order",
        )
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        params: list[str],
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        chart_params = [ChartParam.from_str(param) for param in params]
        print(render_values(chart_params), end="")
