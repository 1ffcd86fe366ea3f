#! /usr/bin/env python3
import argparse
import dataclasses
import logging
import os

import ci.log
import postprocess.config as pc
import postprocess.pipeline as pp

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='post-process a plugin release (by default: update CHANGELOG.md)',
    )
    parser.add_argument(
        '--root-dir',
        default=os.getcwd(),
        help='repository root (defaults to cwd)',
    )
    parser.add_argument(
        '--cfg',
        default=None,
        help=f'cfg-file to read (defaults to {pc.DEFAULT_CFG_FILE_NAME} in root-dir, if present)',
    )
    parser.add_argument(
        '--changelog',
        default=None,
        help='path to changelog (relative to root-dir)',
    )
    parser.add_argument(
        '--tag-prefix',
        default=None,
        help='prefix of release-tags',
    )
    parser.add_argument(
        '--head',
        default=None,
        help='ref to collect commits up to',
    )
    parser.add_argument(
        '--enable-stage',
        action='append',
        default=[],
        choices=[stage.value for stage in pp.StageName],
    )
    parser.add_argument(
        '--disable-stage',
        action='append',
        default=[],
        choices=[stage.value for stage in pp.StageName],
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        default=False,
    )

    return parser.parse_args(argv)


def cfg_from_args(parsed: argparse.Namespace) -> pc.PostprocessCfg:
    cfg = pc.load_cfg(
        root_dir=parsed.root_dir,
        cfg_path=parsed.cfg,
    )

    overrides = {
        attr: value for attr, value in (
            ('changelog_path', parsed.changelog),
            ('tag_prefix', parsed.tag_prefix),
            ('head', parsed.head),
        ) if value is not None
    }
    cfg = dataclasses.replace(cfg, **overrides)

    return pc.with_stages(
        cfg=cfg,
        enabled=parsed.enable_stage,
        disabled=parsed.disable_stage,
    )


def main(argv=None):
    parsed = parse_args(argv)
    ci.log.configure_default_logging(
        stdout_level=logging.DEBUG if parsed.verbose else logging.INFO,
    )

    pp.run(cfg=cfg_from_args(parsed))


if __name__ == '__main__':
    main()
