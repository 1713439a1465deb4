import asyncio
import os
import socket
import time
from collections import defaultdict

from pingscope.core.errors import ProbeSetupError
from pingscope.core.models import Sample

from .icmp_packet import build_echo_request, parse_echo_reply
from .probe_config import ProbeConfig
from .sample_source import failed_sample
from .system_info import has_privileged_access

RECEIVE_BUFFER_SIZE = 2048


class IcmpProbe:
    """
    Sends one ICMP echo request per call and waits for the matching reply.

    Unprivileged processes use an ICMP datagram socket, where the kernel
    owns the echo identifier and only routes our own replies back to us.
    Privileged processes use a raw socket and filter replies by
    identifier and sequence.
    """

    def __init__(
        self,
        config: ProbeConfig,
        privileged: bool | None = None,
    ) -> None:
        if privileged is None:
            privileged = has_privileged_access()

        self.config = config
        self.privileged = privileged
        self.addresses: dict[str, str] = {}

        self._identifier = os.getpid() & 0xFFFF
        self._sequences: dict[str, int] = defaultdict(int)

    @property
    def family(self) -> socket.AddressFamily:
        if self.config.ip_version == 6:
            return socket.AF_INET6

        return socket.AF_INET

    @property
    def protocol(self) -> int:
        if self.config.ip_version == 6:
            return socket.IPPROTO_ICMPV6

        return socket.IPPROTO_ICMP

    def open_socket(self) -> socket.socket:
        sock_type = socket.SOCK_RAW if self.privileged else socket.SOCK_DGRAM

        sock = socket.socket(self.family, sock_type, self.protocol)
        sock.setblocking(False)

        return sock

    def check(self):
        try:
            self.open_socket().close()

        except OSError as err:
            raise ProbeSetupError(
                f"Unable to open ICMP socket - {err}. Run with elevated privileges "
                "or allow unprivileged ICMP (net.ipv4.ping_group_range on Linux)."
            ) from err

    async def resolve(self, targets: list[str]) -> dict[str, str]:
        loop = asyncio.get_event_loop()

        for target in targets:
            try:
                address_info = await loop.getaddrinfo(
                    target,
                    None,
                    family=self.family,
                    type=socket.SOCK_DGRAM,
                )

            except socket.gaierror as err:
                raise ProbeSetupError(
                    f"Unable to resolve target {target} - {err}"
                ) from err

            if len(address_info) == 0:
                raise ProbeSetupError(f"Unable to resolve target {target}")

            self.addresses[target] = address_info[0][4][0]

        return dict(self.addresses)

    def next_sequence(self, target: str) -> int:
        self._sequences[target] = (self._sequences[target] + 1) & 0xFFFF
        return self._sequences[target]

    async def ping(self, target: str) -> Sample:
        loop = asyncio.get_event_loop()

        address = self.addresses.get(target, target)
        sequence = self.next_sequence(target)

        packet = build_echo_request(
            self._identifier,
            sequence,
            self.config.payload,
            ip_version=self.config.ip_version,
        )

        send_time = time.time()

        with self.open_socket() as sock:
            start = time.perf_counter()
            await loop.sock_sendto(sock, packet, (address, 0))

            deadline = loop.time() + self.config.timeout

            while (remaining := deadline - loop.time()) > 0:
                try:
                    data = await asyncio.wait_for(
                        loop.sock_recv(sock, RECEIVE_BUFFER_SIZE),
                        timeout=remaining,
                    )

                except asyncio.TimeoutError:
                    break

                if self._matches(data, sequence):
                    elapsed = time.perf_counter() - start

                    return Sample(
                        target=target,
                        latency=elapsed * 1000,
                        send_time=send_time,
                        receive_time=time.time(),
                    )

        return failed_sample(target, send_time=send_time)

    def _matches(self, data: bytes, sequence: int) -> bool:
        reply = parse_echo_reply(
            data,
            ip_version=self.config.ip_version,
            has_ip_header=self.privileged,
        )

        if reply is None:
            return False

        identifier, reply_sequence = reply
        if reply_sequence != sequence:
            return False

        # Datagram sockets rewrite the identifier to the socket's port.
        return not self.privileged or identifier == self._identifier
