import argparse
from facescope.config.settings import CAMERA_SOURCE
from facescope.utils.logging_config import setup_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Webcam face age, gender and expression viewer")
    parser.add_argument('--source', default=CAMERA_SOURCE,
                        help="Camera index (0 for the default camera), stream URL or video file")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging()

    from facescope.ui.app import FaceScopeApp
    app = FaceScopeApp(camera_source=args.source)
    app.root.mainloop()


if __name__ == "__main__":
    main()
