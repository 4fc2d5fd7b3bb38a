#!/usr/bin/env python3
import logging
import os

from aws_cdk import App

from site_infra.application import build_app
from site_infra.config import AppConfig

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = App()

build_app(app, AppConfig.from_app(app))

app.synth()
