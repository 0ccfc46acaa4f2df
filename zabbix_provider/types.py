"""
Type definitions for Zabbix API records
Based on the Zabbix 7.0 API specification
"""

from typing import TypedDict, List, Dict, Any


# Exact-match filter of a *.get call
FilterCriteria = Dict[str, Any]

# Free-form parameters of a *.get call
Params = Dict[str, Any]


class UserGroupID(TypedDict):
    """User group reference"""
    usrgrpid: str


class User(TypedDict, total=False):
    """user object"""
    userid: str
    username: str
    passwd: str
    roleid: str
    name: str
    surname: str
    usrgrps: List[UserGroupID]


class UserGroupPermission(TypedDict):
    """
    Host group permission

    permission: 0=access denied, 2=read-only, 3=read-write
    """
    id: str
    permission: int


class UserGroup(TypedDict, total=False):
    """
    usergroup object

    debug_mode: 0=disabled, 1=enabled
    gui_access: 0=system default, 1=internal, 2=LDAP, 3=disabled
    users_status: 0=enabled, 1=disabled
    """
    usrgrpid: str
    name: str
    debug_mode: int
    gui_access: int
    users_status: int
    hostgroup_rights: List[UserGroupPermission]


class Proxy(TypedDict, total=False):
    """
    proxy object

    operating_mode: 0=active proxy, 1=passive proxy
    tls_connect: 1=no encryption, 2=PSK, 4=certificate
    tls_accept: bitmask of 1=no encryption, 2=PSK, 4=certificate
    """
    proxyid: str
    name: str
    operating_mode: int
    description: str
    tls_connect: int
    tls_accept: int
    tls_issuer: str
    tls_subject: str
    tls_psk_identity: str
    tls_psk: str
    allowed_addresses: str
