#!/usr/bin/env python
# Copyright (c) 2020 featuregrid Developers.
# Distributed under the terms of the Apache 2.0 License
# SPDX-License-Identifier: Apache-2.0

import argparse
import logging
from pathlib import Path

from featuregrid.config import Config
from featuregrid.features import features_to_geodataframe, read_features
from featuregrid.gridding import GriddingPolicy
from featuregrid.processing import extent_of, grid_features


if __name__ == '__main__':
    # Set up script configuration
    parser = argparse.ArgumentParser(
        description="Split a vector file into one GeoJSON file per grid cell.", usage=argparse.SUPPRESS
    )

    parser.add_argument(
        "-i",
        "--input",
        help="<Required> Input vector file",
        required=True,
        metavar="~/parcels.gpkg",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        help="<Required> Output Directory",
        required=True,
        metavar="~/output/",
    )
    parser.add_argument(
        "-c", "--config", help="YAML gridding settings file", default=None, metavar="gridding.yml"
    )
    parser.add_argument(
        "-s", "--cell-size", help="Cell size (overrides config)", default=None, metavar="1000"
    )
    parser.add_argument(
        "-t", "--culling-technique", help="'centroid' or 'crop' (overrides config)", default=None
    )
    parser.add_argument(
        "-v", "--verbose", help="Log every grid cell", action="store_true"
    )

    try:
        args = parser.parse_args()
        output_dir = Path(args.output_dir).expanduser()
        conf = Config.from_yaml(Path(args.config).expanduser()) if args.config else Config()
        if args.cell_size is not None:
            conf.add('cell_size', args.cell_size)
        if args.culling_technique is not None:
            conf.add('culling_technique', args.culling_technique)
        policy = GriddingPolicy.from_config(conf, strict=True)
    except (SystemExit, ValueError):
        parser.print_help()
        raise

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    features = read_features(Path(args.input).expanduser())
    extent = extent_of(features)
    print(f"Read {len(features)} features covering {tuple(extent)}")
    print("Gridding policy:")
    for k, v in policy.to_config().to_dict().items():
        print(f"\t{k}: {v}")

    cells = grid_features(features, policy, extent=extent, skip_empty=True, progress=True)

    output_dir.mkdir(parents=True, exist_ok=True)
    for i, cell_features in cells.items():
        features_to_geodataframe(cell_features).to_file(
            output_dir / f"cell_{i:05d}.geojson", driver="GeoJSON"
        )

    print(f"\n\nSUCCESS: WROTE {len(cells)} NON-EMPTY CELLS TO {output_dir}")
