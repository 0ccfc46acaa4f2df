"""Resource and data source definitions, one module per Zabbix entity"""
