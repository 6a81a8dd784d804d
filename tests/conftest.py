from tests.test_fixtures import (  # noqa: F401
    converter_config_factory,
    image_dir,
    recording_codec,
    sample_svg,
)
