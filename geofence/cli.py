"""Command line front-end: check whether addresses are near an anchor"""

import logging
import sys
from typing import Optional, Tuple

import click

from . import __version__
from .config import load_config
from .engine import Geofence
from .exceptions import GeofenceError

logger = logging.getLogger(__name__)


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.version_option(version=__version__, prog_name="geofence")
@click.argument('ip_addresses', nargs=-1, required=True)
@click.option('-c', '--config', 'config_path', type=click.Path(dir_okay=False),
              help='YAML or JSON configuration file')
@click.option('-a', '--anchor-ip', help='Anchor IP address (default: public IP of this host)')
@click.option('-t', '--token', envvar='GEOFENCE_TOKEN', help='Geolocation provider API token')
@click.option('-r', '--radius', type=float, help='Proximity radius in kilometers')
@click.option('-s', '--sensitivity', type=click.IntRange(0, 5),
              help='Legacy precision mode: matching decimal places (0-5)')
@click.option('--cache-ttl', type=float, help='Verdict cache time-to-live in seconds (<= 0 never expires)')
@click.option('-p', '--allow-private/--no-allow-private', default=None,
              help='Treat private and loopback addresses as near (overrides the config file)')
@click.option('--redis-host', help='Use a redis verdict cache on this host')
@click.option('--redis-port', type=int, help='Redis port (default: 6379)')
@click.option('--redis-db', type=int, help='Redis database number (default: 0)')
@click.option('--redis-password', envvar='GEOFENCE_REDIS_PASSWORD', help='Redis password')
@click.option('-T', '--timeout', type=float, help='Provider request timeout in seconds')
@click.option('-V', '--verbose', is_flag=True, help='Verbose output (DEBUG level)')
@click.option('-q', '--quiet', is_flag=True, help='Quiet mode (ERROR level)')
def cli(ip_addresses: Tuple[str, ...], config_path: Optional[str], anchor_ip: Optional[str],
        token: Optional[str], radius: Optional[float], sensitivity: Optional[int],
        cache_ttl: Optional[float], allow_private: Optional[bool], redis_host: Optional[str],
        redis_port: Optional[int], redis_db: Optional[int], redis_password: Optional[str],
        timeout: Optional[float], verbose: bool, quiet: bool):
    """Report whether each IP address is near the anchor location."""
    setup_logging(verbose=verbose, quiet=quiet)

    redis_overrides = {
        'host': redis_host,
        'port': redis_port,
        'db': redis_db,
        'password': redis_password,
    }

    try:
        config = load_config(
            config_path,
            ip_address=anchor_ip,
            token=token,
            radius=radius,
            sensitivity=sensitivity,
            cache_ttl=cache_ttl,
            allow_private_ip_addresses=allow_private,
            request_timeout=timeout,
            redis=redis_overrides,
        )
        geofence = Geofence(config)
    except GeofenceError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(2)

    logger.debug(f"Checking {len(ip_addresses)} address(es) in {geofence.proximity_mode.value} mode")
    failed = False
    try:
        for ip_address in ip_addresses:
            try:
                near = geofence.is_ip_address_near(ip_address)
            except GeofenceError as e:
                failed = True
                click.echo(f"{ip_address}: error: {e.message}")
                continue
            click.echo(f"{ip_address}: {'near' if near else 'not near'}")
    finally:
        geofence.close()

    if failed:
        sys.exit(1)


def setup_logging(verbose: bool = False, quiet: bool = False):
    """Configure logging for the command line"""
    if quiet:
        log_level = logging.ERROR
    elif verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.WARNING

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )

    # Set third-party loggers to WARNING to reduce noise
    for logger_name in ['requests', 'urllib3']:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
