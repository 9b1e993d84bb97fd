"""
EventStream - Command Line Entry Point
"""

import json

import click

from eventstream.config import config
from eventstream.sse.encoders import JSONEncoder
from eventstream.sse.errors import InvalidRetryValue
from eventstream.sse.framing import FramingPolicy
from eventstream.sse.sink import MemorySink
from eventstream.sse.stream import EventStream, parse_retry
from eventstream.utils.logger import setup_logging


@click.group()
def cli():
    """EventStream - Server-Sent Events framing tools"""
    pass


@cli.command()
@click.argument('data', required=False, default='')
@click.option('--event', '-e', help='Event name')
@click.option('--id', 'event_id', help='Event id')
@click.option('--retry', '-r', help='Reconnection delay in milliseconds')
@click.option('--comment', '-c', multiple=True, help='Comment line sent before the message (repeatable)')
@click.option('--json', 'as_json', is_flag=True, help='Parse DATA as JSON and send it compact-encoded')
@click.option('--policy', '-p', type=click.Choice([p.value for p in FramingPolicy]),
              default=None, help='Framing policy (defaults to configured policy)')
def frame(data, event, event_id, retry, comment, as_json, policy):
    """Print the wire format of one message"""
    if retry is not None:
        try:
            parse_retry(retry)
        except InvalidRetryValue as e:
            raise click.BadParameter(str(e), param_hint='--retry')

    encoder = None
    if as_json:
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"not valid JSON: {e}", param_hint='DATA')
        encoder = JSONEncoder()

    sink = MemorySink()
    stream = EventStream({}, sink, encoder=encoder, policy=policy or config.framing_policy())
    stream.init()
    for text in comment:
        stream.send_comment(text)
    stream.send_message(data, event=event, id=event_id, retry=retry)
    stream.close()

    click.echo(sink.output, nl=False)


@cli.command()
@click.option('--host', default=None, help=f'Bind address (default: {config.HOST})')
@click.option('--port', default=None, type=int, help=f'Port (default: {config.PORT})')
@click.option('--debug', is_flag=True, help='Enable Flask debug mode')
def serve(host, port, debug):
    """Run the demo SSE server"""
    logger = setup_logging()
    from app import app

    host = host or config.HOST
    port = port or config.PORT
    logger.info(f"Serving SSE demo on http://{host}:{port}/api/events")
    app.run(host=host, port=port, debug=debug, threaded=True)


if __name__ == '__main__':
    cli()
