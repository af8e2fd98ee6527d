# Part of DynamicProxy, see License file for full copyright and licensing details.
