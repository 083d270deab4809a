# main.py
# Replay recorded position samples through a route session.
#   python main.py config.json samples.json "Library"
# samples.json: [[lon, lat], ...] in arrival order
import json
import sys

from campus_nav.app.build import build
from campus_nav.app.controllers.position_feed import PositionFeed
from campus_nav.domain.entities.geography import GeoPoint
from campus_nav.io.route_sinks import route_feature_collection


def run(config_file: str, samples_file: str, destination: str) -> dict:
    with open(config_file, encoding="utf-8") as fp:
        app = build(json.load(fp))
    with open(samples_file, encoding="utf-8") as fp:
        samples = [GeoPoint(float(lon), float(lat)) for lon, lat in json.load(fp)]

    try:
        with PositionFeed(app.session) as feed:
            feed.submit_destination(app.catalog.get(destination))
            for p in samples:
                feed.submit_position(p)
            feed.drain()
    finally:
        app.close()
    return route_feature_collection(app.session.current_sub_path)


if __name__ == "__main__":
    if len(sys.argv) != 4:
        sys.exit("usage: main.py CONFIG SAMPLES DESTINATION")
    print(json.dumps(run(*sys.argv[1:])))
