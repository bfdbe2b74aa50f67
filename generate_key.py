"""
Generate a back-office API key.

Prints the raw key (give it to the operator) and its SHA-256 hash (set as
API_KEY_HASH on the server).
"""

from portal.utils.api_key import generate_api_key, hash_api_key


def main():
    api_key = generate_api_key()
    key_hash = hash_api_key(api_key)

    print("=" * 50)
    print("BACK-OFFICE API KEY")
    print("=" * 50)
    print(f"API Key:      {api_key}")
    print(f"SHA-256 Hash: {key_hash}")
    print("=" * 50)
    print("\n1. Add the hash to .env:")
    print(f"   API_KEY_HASH={key_hash}")
    print("2. Restart the server.")
    print("3. Send the key in the 'X-API-Key' header on /api/admin requests.")
    print("\nOnly the hash is stored; the key cannot be recovered later.")


if __name__ == "__main__":
    main()
