import socket
import socketserver
import threading

import pytest


class HttpEchoServer(socketserver.BaseRequestHandler):
    def handle(self):
        data = self.request.recv(65536)
        head, sep, rest = data.partition(b"\r\n\r\n")
        length = 0
        for line in head.split(b"\r\n")[1:]:
            name, _, value = line.partition(b":")
            if name.strip().lower() == b"content-length":
                length = int(value.strip())
        while sep and len(rest) < length:
            chunk = self.request.recv(65536)
            if not chunk:
                break
            rest += chunk
            data += chunk
        self.request.sendall(b"HTTP/1.1 200 OK\r\n")
        self.request.sendall(b"Content-Length: %d\r\n" % len(data))
        self.request.sendall(b"X-Echo: yes\r\nConnection: close\r\n")
        self.request.sendall(b"\r\n")
        self.request.sendall(data)


class HttpRedirectLoop(socketserver.BaseRequestHandler):
    def handle(self):
        self.request.recv(65536)
        self.request.sendall(b"HTTP/1.1 302 Found\r\nLocation: /again\r\nConnection: close\r\nContent-Length: 0\r\n\r\n")


class HttpStall(socketserver.BaseRequestHandler):
    released = threading.Event()

    def handle(self):
        self.request.recv(65536)
        self.released.wait(60)


class HttpDrip(socketserver.BaseRequestHandler):
    released = threading.Event()

    def handle(self):
        self.request.recv(65536)
        try:
            self.request.sendall(b"HTTP/1.1 200 OK\r\nContent-Length: 20\r\nConnection: close\r\n\r\n")
            for _ in range(20):
                if self.released.wait(0.3):
                    return
                self.request.sendall(b"x")
        except OSError:
            return


class _Server(socketserver.ThreadingTCPServer):
    daemon_threads = True
    allow_reuse_address = True


def _serve(handler):
    server = _Server(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address
    return server, f"http://{host}:{port}"


@pytest.fixture
def echo_url():
    server, url = _serve(HttpEchoServer)
    yield url
    server.shutdown()
    server.server_close()


@pytest.fixture
def redirect_url():
    server, url = _serve(HttpRedirectLoop)
    yield url
    server.shutdown()
    server.server_close()


@pytest.fixture
def stall_url():
    HttpStall.released.clear()
    server, url = _serve(HttpStall)
    yield url
    HttpStall.released.set()
    server.shutdown()
    server.server_close()


@pytest.fixture
def closed_url():
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        host, port = s.getsockname()
    return f"http://{host}:{port}"


@pytest.fixture(autouse=True)
def no_log_config(monkeypatch, tmp_path):
    monkeypatch.setenv("CURLETTE_LOG_CONFIG", str(tmp_path / "missing.yaml"))


@pytest.fixture
def drip_url():
    HttpDrip.released.clear()
    server, url = _serve(HttpDrip)
    yield url
    HttpDrip.released.set()
    server.shutdown()
    server.server_close()
