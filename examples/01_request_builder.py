"""01: Request builder.

Build a chat completion payload fluently, send it with the blocking client,
and read the first choice.
"""

from groqkit import (
    ChatCompletionClient,
    ChatCompletionRequestBuilder,
    GroqSettings,
    parse_response,
)

client = ChatCompletionClient(GroqSettings.from_env())

payload = (
    ChatCompletionRequestBuilder.create()
    .with_model("llama-3.3-70b-versatile")
    .with_system_prompt("Answer in one sentence.")
    .with_user_prompt("What is the capital of France?")
    .with_temperature(0.2)
    .with_max_completion_tokens(64)
    .build()
)

response = parse_response(client.send_chat_completion(payload))

print("Response:", response.text)
print(f"Tokens: in={response.usage.input_tokens}, out={response.usage.output_tokens}")
