"""Run the flux-loader command line tool with `python -m flux_loader`."""

from flux_loader.tool.flux_loader import main

if __name__ == "__main__":
    main()
