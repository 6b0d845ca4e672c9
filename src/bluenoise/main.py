import logging

from bluenoise.viewer import Viewer
from bluenoise.worlds.stipple_world import StippleWorld, StippleWorldConfig, SamplingMode


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    world = StippleWorld(StippleWorldConfig())
    # world = StippleWorld(StippleWorldConfig(mode=SamplingMode.FUNCTION))
    # world = StippleWorld(StippleWorldConfig(mode=SamplingMode.MASKED, n_initial=0))
    Viewer(world).run()


if __name__ == "__main__":
    main()
