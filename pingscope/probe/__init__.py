from .icmp_packet import (
    build_echo_request as build_echo_request,
    checksum as checksum,
    parse_echo_reply as parse_echo_reply,
)
from .icmp_probe import IcmpProbe as IcmpProbe
from .icmp_source import IcmpSampleSource as IcmpSampleSource
from .probe_config import ProbeConfig as ProbeConfig
from .sample_source import (
    SampleSource as SampleSource,
    failed_sample as failed_sample,
)
from .system_info import (
    SystemInfo as SystemInfo,
    has_privileged_access as has_privileged_access,
    system_info as system_info,
)
