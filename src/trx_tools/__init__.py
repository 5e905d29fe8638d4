"""trx-tools: parse Visual Studio TRX test results and render HTML reports."""

__version__ = "0.1.0"
