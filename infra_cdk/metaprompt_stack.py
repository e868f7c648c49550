# infra_cdk/metaprompt_stack.py
from aws_cdk import (
    Stack,
    Duration,
    Aspects,
    CfnParameter,
    aws_lambda as _lambda,
    aws_iam as iam,
    aws_cognito as cognito,
    aws_apigateway as apigw,
    CfnOutput
)
from constructs import Construct
from cdk_nag import AwsSolutionsChecks

DEFAULT_BEDROCK_MODEL = "anthropic.claude-3-sonnet-20240229-v1:0"

# Model families the workers may call (see BedrockInvoker.build_request_body)
BEDROCK_MODEL_FAMILIES = ["anthropic.*", "amazon.nova*"]

# Everything in the repo that is not lambda code stays out of the function asset.
# Slash-free patterns match a base name anywhere in the tree, so none of them
# may name a file that also exists under lambdas/.
LAMBDA_ASSET_EXCLUDES = [
    "cdk.out", ".venv", ".git", "tests", "cli", "infra_cdk", "lambda_layer",
    "*.md", "*.txt", "!lambdas/common/prompts/*.txt",
    "cdk.json", "pyproject.toml", "**/__pycache__",
]


def foundation_model_arns(region: str) -> list[str]:
    return [f"arn:aws:bedrock:{region}::foundation-model/{family}" for family in BEDROCK_MODEL_FAMILIES]


class MetapromptStack(Stack):
    '''
    CDK stack for the meta-prompt generator.
    A Cognito-protected REST API accepts createPrompt/createTask requests; the request
    handler lambda passes them on asynchronously to the prompt generator or task distiller,
    which call Bedrock and write status and results back to AppSync.
    '''

    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # === Parameters for Deployment ===
        appsync_endpoint_param = CfnParameter(self, "AppSyncEndpoint", type="String",
            description="The GraphQL endpoint URL of the AppSync API holding prompts and tasks.")

        appsync_api_key_param = CfnParameter(self, "AppSyncApiKey", type="String", no_echo=True,
            description="The API key used by the worker lambdas to call AppSync.")

        user_pool_id_param = CfnParameter(self, "UserPoolId", type="String",
            description="The Cognito user pool whose users may call the API.")

        bedrock_model_param = CfnParameter(self, "BedrockModel", type="String",
            default=DEFAULT_BEDROCK_MODEL,
            description="The Bedrock model id used to generate prompts and distill tasks.")

        # === Shared Lambda Layer (pydantic, pydantic-settings, requests) ===
        common_layer = _lambda.LayerVersion(self, "CommonLayer",
            code=_lambda.Code.from_asset("lambda_layer"),
            compatible_runtimes=[_lambda.Runtime.PYTHON_3_12],
            compatible_architectures=[_lambda.Architecture.ARM_64],
            description="Third-party packages shared by the meta-prompt lambdas"
        )

        # === IAM Roles ===
        request_handler_role = iam.Role(self, "RequestHandlerRole",
            assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name("service-role/AWSLambdaBasicExecutionRole"),
            ],
        )

        generator_role = iam.Role(self, "PromptGeneratorRole",
            assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name("service-role/AWSLambdaBasicExecutionRole"),
            ],
        )
        generator_role.add_to_policy(iam.PolicyStatement(
            actions=["bedrock:InvokeModel", "bedrock:InvokeModelWithResponseStream"],
            resources=foundation_model_arns(self.region),
        ))

        worker_environment = {
            "APPSYNC_ENDPOINT": appsync_endpoint_param.value_as_string,
            "APPSYNC_API_KEY": appsync_api_key_param.value_as_string,
            "BEDROCK_MODEL": bedrock_model_param.value_as_string,
        }
        lambda_code = _lambda.Code.from_asset(".", exclude=LAMBDA_ASSET_EXCLUDES)

        # === Worker Lambdas ===
        self.prompt_generator_function = _lambda.Function(self, "PromptGeneratorFunction",
            runtime=_lambda.Runtime.PYTHON_3_12,
            architecture=_lambda.Architecture.ARM_64,
            code=lambda_code,
            handler="lambdas.prompt_generator.app.handler",
            timeout=Duration.minutes(5),
            memory_size=512,
            role=generator_role,
            environment=worker_environment,
            layers=[common_layer]
        )

        self.task_distiller_function = _lambda.Function(self, "TaskDistillerFunction",
            runtime=_lambda.Runtime.PYTHON_3_12,
            architecture=_lambda.Architecture.ARM_64,
            code=lambda_code,
            handler="lambdas.task_distiller.app.handler",
            timeout=Duration.minutes(5),
            memory_size=512,
            role=generator_role,
            environment=worker_environment,
            layers=[common_layer]
        )

        # === Request Handler Lambda ===
        self.request_handler_function = _lambda.Function(self, "RequestHandlerFunction",
            runtime=_lambda.Runtime.PYTHON_3_12,
            architecture=_lambda.Architecture.ARM_64,
            code=lambda_code,
            handler="lambdas.request_handler.app.handler",
            timeout=Duration.minutes(5),
            role=request_handler_role,
            environment={
                "PROMPT_GENERATOR_FUNCTION": self.prompt_generator_function.function_name,
                "TASK_DISTILLER_FUNCTION": self.task_distiller_function.function_name,
            },
            layers=[common_layer]
        )
        self.prompt_generator_function.grant_invoke(self.request_handler_function)
        self.task_distiller_function.grant_invoke(self.request_handler_function)

        # === REST API with Cognito authorization ===
        api = apigw.RestApi(self, "MetaPromptGeneratorApi",
            rest_api_name="metaPromptGeneratorAPI",
            default_cors_preflight_options=apigw.CorsOptions(
                allow_headers=["Content-Type", "X-Amz-Date", "Authorization", "x-amz-security-token"],
                allow_methods=["OPTIONS", "POST", "GET"],
                allow_credentials=True,
                allow_origins=apigw.Cors.ALL_ORIGINS,
            ),
            deploy_options=apigw.StageOptions(
                logging_level=apigw.MethodLoggingLevel.OFF,
                data_trace_enabled=False,
            ),
            endpoint_configuration=apigw.EndpointConfiguration(
                types=[apigw.EndpointType.REGIONAL],
            ),
        )

        user_pool = cognito.UserPool.from_user_pool_id(self, "UserPool", user_pool_id_param.value_as_string)
        authorizer = apigw.CognitoUserPoolsAuthorizer(self, "ApiAuthorizer",
            cognito_user_pools=[user_pool],
        )

        request_integration = apigw.LambdaIntegration(self.request_handler_function)
        for path in ("createPrompt", "createTask"):
            resource = api.root.add_resource(path)
            resource.add_method("POST", request_integration,
                authorizer=authorizer,
                authorization_type=apigw.AuthorizationType.COGNITO,
            )

        self.api_url = api.url

        # === Outputs ===
        CfnOutput(self, "ApiUrl", value=api.url, description="Base URL of the meta-prompt API.")
        CfnOutput(self, "PromptGeneratorFunctionName", value=self.prompt_generator_function.function_name)
        CfnOutput(self, "TaskDistillerFunctionName", value=self.task_distiller_function.function_name)

        # Add AWS Solutions checks for best practices
        Aspects.of(self).add(AwsSolutionsChecks())
