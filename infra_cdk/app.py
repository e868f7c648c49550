#!/usr/bin/env python3
# infra_cdk/app.py: CDK entry point (see cdk.json)
import aws_cdk as cdk

from infra_cdk.metaprompt_stack import MetapromptStack

app = cdk.App()
MetapromptStack(app, "MetapromptGeneratorStack")
app.synth()
