"""fbtoken CLI - mint a Firebase custom token and exchange it for an ID token."""

import logging
import os
import sys

import click
from click.core import ParameterSource
from dotenv import load_dotenv

from fbtoken import __version__
from fbtoken.sdk.admin import AdminClient
from fbtoken.sdk.cache import SetupCache
from fbtoken.sdk.config import load_config, get_config_value, get_cache_file_path, get_credentials_dir
from fbtoken.sdk.credentials import ADC_ENV_VAR, find_service_account, resolve_credential
from fbtoken.sdk.exceptions import FbTokenError, CredentialDirectoryMissingError
from fbtoken.sdk.exchange import exchange_custom_token
from fbtoken.sdk.prompt import Prompter

from .display import format_saved_at, show_detail, show_custom_token, show_exchange_result, show_error


# Configure logging at the application level
if not logging.root.handlers:
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.WARNING),
                        format='%(asctime)s - %(levelname)s - %(message)s')
# Suppress noisy INFO logs from the HTTP and auth stacks
logging.getLogger('urllib3.connectionpool').setLevel(logging.WARNING)
logging.getLogger('google.auth').setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

EXIT_NO_UID = 1
EXIT_ADMIN_INIT = 2
EXIT_TOKEN = 3

SETUP_FLAGS = ('uid', 'service_account', 'api_key', 'project_id')

CONTEXT_SETTINGS = dict(help_option_names=['-h', '--help'])


def _any_flag_given(ctx) -> bool:
    """True if any setup value came from the command line (env vars don't count)."""
    return any(
        ctx.get_parameter_source(name) == ParameterSource.COMMANDLINE
        for name in SETUP_FLAGS
    )


def _auto_detect_service_account(credentials_dir):
    try:
        return find_service_account(credentials_dir)
    except CredentialDirectoryMissingError:
        return None


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option('--uid', help='Firebase user UID to mint token for.')
@click.option('--serviceAccount', 'service_account',
              help=f'Path to service account JSON file (or set {ADC_ENV_VAR}).')
@click.option('--apiKey', 'api_key', envvar='FIREBASE_API_KEY',
              help='Web API key for Firebase project (can be set in FIREBASE_API_KEY env).')
@click.option('--projectId', 'project_id', envvar='FIREBASE_PROJECT_ID',
              help='Firebase project id (optional, FIREBASE_PROJECT_ID env).')
@click.option('--no-cache', is_flag=True,
              help='Neither offer nor save the setup cache for this run.')
@click.version_option(__version__, prog_name='fbtoken')
@click.pass_context
def fbtoken(ctx, uid, service_account, api_key, project_id, no_cache):
    """Firebase token helper.

    Mints a custom token for a UID with a service account, then exchanges it
    for an ID/refresh token pair. Missing values are asked for interactively.
    """
    config_data = load_config()
    prompter = Prompter()
    # An env credential outranks cached and configured paths
    adc_from_env = not service_account and bool(os.getenv(ADC_ENV_VAR))

    setup_cache = None
    if not no_cache and get_config_value('cache.enabled', True, config_data):
        setup_cache = SetupCache(get_cache_file_path(config_data))

    # Offer the cached setup only when nothing was passed on the command line
    if setup_cache is not None and not _any_flag_given(ctx):
        cached = setup_cache.read()
        if cached and prompter.confirm(
                f"Found saved setup from {format_saved_at(cached.get('timestamp'))}. Load it? (y/N): "):
            uid = uid or cached.get('uid')
            if not adc_from_env:
                service_account = service_account or cached.get('service_account')
            api_key = api_key or cached.get('api_key')
            project_id = project_id or cached.get('project_id')
            click.secho('Loaded cached setup.', dim=True)

    defaults = get_config_value('defaults', {}, config_data) or {}
    if not adc_from_env:
        service_account = service_account or defaults.get('service_account')
    api_key = api_key or defaults.get('api_key')
    project_id = project_id or defaults.get('project_id')

    if not uid:
        uid = prompter.ask('Enter UID to mint token for: ')
        if not uid:
            show_error('No UID provided, aborting.')
            sys.exit(EXIT_NO_UID)

    if not api_key:
        api_key = prompter.ask('Enter Firebase Web API key (or press Enter to leave empty): ') or None

    credentials_dir = get_credentials_dir(config_data)
    if not service_account and not os.getenv(ADC_ENV_VAR):
        picked = _auto_detect_service_account(credentials_dir)
        if picked:
            service_account = str(picked)
            show_detail('Auto-detected service account:', service_account)
        else:
            service_account = prompter.ask(
                'Service account path not found. Enter path to service account JSON (or press Enter to abort): '
            ) or None

    try:
        credential, source = resolve_credential(service_account, search_dir=credentials_dir)
        logger.info(f"Using credentials: {source}")
        client = AdminClient(credential, project_id=project_id)
        client.initialize()
    except (FbTokenError, ValueError) as e:
        show_error(str(e), prefix='Failed to initialize Firebase Admin:')
        sys.exit(EXIT_ADMIN_INIT)

    try:
        custom_token = client.mint(uid)
        # Printed before the exchange so it stays usable if the exchange fails
        show_custom_token(custom_token)

        result = exchange_custom_token(custom_token, api_key)
        show_exchange_result(result)
    except FbTokenError as e:
        show_error(str(e))
        sys.exit(EXIT_TOKEN)
    finally:
        client.close()

    if setup_cache is not None:
        setup_cache.write({
            'uid': uid,
            'service_account': service_account,
            'api_key': api_key,
            'project_id': project_id,
        })


def main():
    """Entry point for the CLI."""
    load_dotenv()
    fbtoken()


if __name__ == "__main__":
    main()
