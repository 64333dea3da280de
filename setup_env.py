import os
import secrets


def generate_jwt_secret() -> str:
    print("Generating JWT signing secret...")
    return secrets.token_urlsafe(48)

def setup_env():
    if os.path.exists(".env"):
        response = input("A .env file already exists. Overwrite it? (y/N): ")
        if response.lower() != 'y':
            print("Aborted.")
            return

    if not os.path.exists(".env.example"):
        print("Error: .env.example not found.")
        return

    print("Reading .env.example...")
    with open(".env.example", "r") as f:
        env_content = f.read()

    jwt_secret = generate_jwt_secret()

    new_lines = []
    for line in env_content.splitlines():
        if line.startswith("JWT_SECRET="):
            new_lines.append(f'JWT_SECRET="{jwt_secret}"')
        else:
            new_lines.append(line)

    with open(".env", "w") as f:
        f.write("\n".join(new_lines))
        f.write("\n") # Ensure trailing newline

    print("SUCCESS: .env file created with a new JWT secret.")

if __name__ == "__main__":
    setup_env()
