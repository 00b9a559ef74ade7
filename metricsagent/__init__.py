"""Host metrics agent: samples system metrics, health, load and host summaries and posts metrics over HTTP."""

__version__ = "0.1.0"