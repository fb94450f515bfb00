# server.py
"""
Markup preview server.
Every line a client sends is parsed and echoed back as an ANSI preview, so
authors can check their $(...) and ${...} expressions from any telnet client.
"""
import asyncio
import logging
import config
from chatmarkup.assembler import parse_expression
from chatmarkup.interpreter import MalformedExpressionError
from chatmarkup import utils

log = logging.getLogger(__name__)

ACTIVE_TASKS = set()


def render_line(line: str) -> str:
    """Parses one line and returns what the client should see."""
    line = line[:getattr(config, 'MAX_INPUT_LENGTH', 512)]
    try:
        segments = parse_expression(line)
    except MalformedExpressionError as e:
        return f"Malformed expression: {e}"
    return utils.colorize(segments)


async def handle_connection(reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
    """Coroutine called for each new client connection."""
    task = asyncio.current_task()
    ACTIVE_TASKS.add(task)
    task.add_done_callback(ACTIVE_TASKS.discard)

    addr = writer.get_extra_info('peername', 'Unknown Address')
    log.info("Connection received from %s", addr)
    try:
        while True:
            data = await reader.readline()
            if not data:
                break
            line = data.decode(config.ENCODING, errors='replace').rstrip("\r\n")
            writer.write((render_line(line) + "\r\n").encode(config.ENCODING))
            await writer.drain()
    except ConnectionError:
        log.info("Connection lost from %s", addr)
    finally:
        log.info("Closing connection from %s", addr)
        writer.close()
        await writer.wait_closed()


async def main():
    """Main server entry point."""
    log.info("Starting markup preview server...")
    server = await asyncio.start_server(handle_connection, config.HOST, config.PORT)
    addr = server.sockets[0].getsockname()
    log.info("Server listening on %s:%s", addr[0], addr[1])

    try:
        await server.serve_forever()
    except asyncio.CancelledError:
        log.info("Main server task cancelled.")
    finally:
        log.info("Shutting down server...")
        server.close()
        await server.wait_closed()
        if ACTIVE_TASKS:
            log.info("Waiting for %d client tasks to complete...", len(ACTIVE_TASKS))
            await asyncio.gather(*ACTIVE_TASKS, return_exceptions=True)
        log.info("Server shutdown complete.")


if __name__ == "__main__":
    # --- Logging Setup ---
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(config.LOG_FILE),
            logging.StreamHandler()
        ]
    )
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Server stopped manually.")
