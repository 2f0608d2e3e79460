"""Central registry for Redis Lua scripts used across the application.

The scripts are registered at application startup for EVALSHA optimization and
make multi-key writes atomic, so uniqueness and status checks are enforced by
the store instead of by read-then-write timing in Python.

Return Code Conventions:
    Every script returns an array whose first element is a numeric status code
    and whose second element is a JSON payload or an empty string.

    - 0: Stale - the guarded value did not match (the vendor status or its
         ``updated_at`` stamp was changed by another writer). The second
         element is the current record.

    - 1: Success - the write happened. The second element is the saved record.

    - 2: Missing or duplicate primary key - for ``transition_vendor_status`` and
         ``update_product`` the record does not exist; for ``create_vendor``
         and ``create_category`` the email or name index is already taken.

    - 3: Duplicate slug - the slug index is already taken (``create_*`` only).
"""

VENDOR_SCRIPTS = {
    "create_vendor": """
        local vendor_key = KEYS[1]
        local email_key = KEYS[2]
        local slug_key = KEYS[3]
        local all_key = KEYS[4]
        local status_key = KEYS[5]
        local vendor_json = ARGV[1]
        local vendor_id = ARGV[2]
        local created_ts = tonumber(ARGV[3])

        if redis.call('EXISTS', email_key) == 1 then
            return {2, ''}
        end
        if redis.call('EXISTS', slug_key) == 1 then
            return {3, ''}
        end

        redis.call('SET', vendor_key, vendor_json)
        redis.call('SET', email_key, vendor_id)
        redis.call('SET', slug_key, vendor_id)
        redis.call('ZADD', all_key, created_ts, vendor_id)
        redis.call('ZADD', status_key, created_ts, vendor_id)
        return {1, vendor_json}
    """,
    "transition_vendor_status": """
        local vendor_key = KEYS[1]
        local from_status_key = KEYS[2]
        local to_status_key = KEYS[3]
        local new_json = ARGV[1]
        local expected_status = ARGV[2]
        local vendor_id = ARGV[3]
        local created_ts = tonumber(ARGV[4])
        local expected_updated_at = ARGV[5]

        local current_raw = redis.call('GET', vendor_key)
        if not current_raw then
            return {2, ''}
        end

        local current = cjson.decode(current_raw)
        local current_updated_at = current.updated_at
        if current_updated_at == nil or current_updated_at == cjson.null then
            current_updated_at = ''
        end
        if current.status ~= expected_status
            or current_updated_at ~= expected_updated_at then
            return {0, current_raw}
        end

        redis.call('SET', vendor_key, new_json)
        if from_status_key ~= to_status_key then
            redis.call('ZREM', from_status_key, vendor_id)
            redis.call('ZADD', to_status_key, created_ts, vendor_id)
        end
        return {1, new_json}
    """,
}

CATALOG_SCRIPTS = {
    "create_category": """
        local category_key = KEYS[1]
        local name_key = KEYS[2]
        local slug_key = KEYS[3]
        local all_key = KEYS[4]
        local category_json = ARGV[1]
        local category_id = ARGV[2]
        local created_ts = tonumber(ARGV[3])

        if redis.call('EXISTS', name_key) == 1 then
            return {2, ''}
        end
        if redis.call('EXISTS', slug_key) == 1 then
            return {3, ''}
        end

        redis.call('SET', category_key, category_json)
        redis.call('SET', name_key, category_id)
        redis.call('SET', slug_key, category_id)
        redis.call('ZADD', all_key, created_ts, category_id)
        return {1, category_json}
    """,
}

PRODUCT_SCRIPTS = {
    "create_product": """
        local product_key = KEYS[1]
        local slug_key = KEYS[2]
        local all_key = KEYS[3]
        local vendor_products_key = KEYS[4]
        local product_json = ARGV[1]
        local product_id = ARGV[2]
        local created_ts = tonumber(ARGV[3])

        if redis.call('EXISTS', slug_key) == 1 then
            return {3, ''}
        end

        redis.call('SET', product_key, product_json)
        redis.call('SET', slug_key, product_id)
        redis.call('ZADD', all_key, created_ts, product_id)
        redis.call('ZADD', vendor_products_key, created_ts, product_id)
        return {1, product_json}
    """,
    "update_product": """
        local product_key = KEYS[1]
        local product_json = ARGV[1]

        if redis.call('EXISTS', product_key) == 0 then
            return {2, ''}
        end

        redis.call('SET', product_key, product_json)
        return {1, product_json}
    """,
}
