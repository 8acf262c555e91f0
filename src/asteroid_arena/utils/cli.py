import argparse
import json


def build_parser():
    parser = argparse.ArgumentParser(description='Headless asteroid arena run')
    parser.add_argument('--seed', type=int, default=1, metavar='N',
                        help='random seed (default: 1)')
    parser.add_argument('--frames', type=int, default=3600, metavar='N',
                        help='number of frames to simulate (default: 3600, one minute at 60 FPS)')
    parser.add_argument('--preset', type=str, default='classic', metavar='NAME',
                        help='bundled preset name or path to a YAML preset (default: classic)')
    parser.add_argument('--config', type=json.loads, default=None, metavar='JSON',
                        help=(
                            'JSON dict of nested config overrides, '
                            'e.g. \'{"initial_lives": 5, "ship": {"max_speed": 10}}\''
                        ))
    parser.add_argument('--pilot', type=str, default='random', choices=['random', 'idle'],
                        help='automated input source (default: random)')
    parser.add_argument('--saucer_interval', type=int, default=None, metavar='N',
                        help='frames between saucer appearances; 0 disables saucers')
    parser.add_argument('--log_interval', type=int, default=600, metavar='N',
                        help='log a status line every N frames (default: 600)')
    parser.add_argument(
        "--log_level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity",
    )
    parser.add_argument(
        "--plot_path",
        type=str,
        default=None,
        help="save the final frame as a PNG at this path",
    )
    return parser

'''
usage: python scripts/main.py --seed 7 --frames 7200 --preset arcade_hard \
    --config '{"initial_lives": 5}' --pilot random --saucer_interval 900 \
        --plot_path results/final_frame.png
'''
